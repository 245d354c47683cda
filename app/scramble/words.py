import random

SETTINGS = {
    "Easy": {"points": 3, "time": 15},
    "Medium": {"points": 5, "time": 30},
    "Hard": {"points": 10, "time": 60},
}

SCRAMBLE_WORDS = [
    {"word": "TRUST", "difficulty": "Easy", "hint": "The core value Billions builds on"},
    {"word": "HUMAN", "difficulty": "Easy", "hint": "What you prove you are"},
    {"word": "PROOF", "difficulty": "Easy", "hint": "ZK gives you one without revealing data"},
    {"word": "AGENT", "difficulty": "Easy", "hint": "An AI that acts on your behalf"},
    {"word": "TOKEN", "difficulty": "Easy", "hint": "A digital asset on a chain"},
    {"word": "CHAIN", "difficulty": "Easy", "hint": "Blocks linked together"},
    {"word": "PHONE", "difficulty": "Easy", "hint": "Used for verification in the network"},
    {"word": "WALLET", "difficulty": "Medium", "hint": "Where your keys live"},
    {"word": "PRIVACY", "difficulty": "Medium", "hint": "Verification is built to respect it"},
    {"word": "IDENTITY", "difficulty": "Medium", "hint": "Billions is a layer for it"},
    {"word": "POLYGON", "difficulty": "Medium", "hint": "A backer of Billions"},
    {"word": "NETWORK", "difficulty": "Medium", "hint": "Billions ____"},
    {"word": "PASSPORT", "difficulty": "Medium", "hint": "A digital one for humans and AI"},
    {"word": "SUPERMASKS", "difficulty": "Hard", "hint": "Second official NFT collection"},
    {"word": "REPUTATION", "difficulty": "Hard", "hint": "Recorded onchain from your contributions"},
    {"word": "CROSSCHAIN", "difficulty": "Hard", "hint": "Works across many blockchains"},
    {"word": "VERIFICATION", "difficulty": "Hard", "hint": "Proving who you are"},
    {"word": "ZEROKNOWLEDGE", "difficulty": "Hard", "hint": "The ZK in ZK proofs"},
]


def words_for(difficulty: str) -> list:
    return [word for word in SCRAMBLE_WORDS if word["difficulty"] == difficulty]


def scramble_word(word: str, rng=random) -> str:
    """Shuffle the letters of ``word`` into an order different from the word."""
    if len(set(word)) < 2:
        return word

    letters = list(word)
    while True:
        rng.shuffle(letters)
        scrambled = "".join(letters)
        if scrambled != word:
            return scrambled


def is_correct_guess(guess: str, word: str) -> bool:
    return guess.strip().lower() == word.lower()
