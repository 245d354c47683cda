from fastapi import APIRouter, HTTPException, Depends
import logging
import random
import time
import uuid

# Project Imports
from .models.scramble_model import StartRoundSchema, RoundTokenSchema, GuessSchema
from .words import SETTINGS, words_for, scramble_word, is_correct_guess
from crud import queries
from database.connect_db import connect_database
from services.response_handler import verify_bearer_token
from services.session_token import seal_state, open_state

app = APIRouter()
logger = logging.getLogger(__name__)

ROUND_FIELDS = {"round_id", "user_id", "difficulty", "word", "hint", "started_at", "deadline"}


def load_round(round_token: str, auth: dict) -> dict:
    game_round = open_state(round_token)

    if not ROUND_FIELDS <= game_round.keys():
        raise HTTPException(status_code=400, detail="Invalid scramble round")

    if str(game_round["user_id"]) != str(auth.get("id")):
        raise HTTPException(status_code=403, detail="This round belongs to another user")

    return game_round


@app.get("/settings")
def scramble_settings():
    return {"message": "Successful Response", "data": SETTINGS}


@app.post("/start")
def start_round(data: StartRoundSchema, auth: dict = Depends(verify_bearer_token)):
    difficulty = data.difficulty.value
    pool = words_for(difficulty)

    if not pool:
        raise HTTPException(
            status_code=404, detail=f"No words available for {difficulty} difficulty."
        )

    chosen = random.choice(pool)
    settings = SETTINGS[difficulty]
    started_at = time.time()

    game_round = {
        "round_id": uuid.uuid4().hex,
        "user_id": auth.get("id"),
        "difficulty": difficulty,
        "word": chosen["word"],
        "hint": chosen["hint"],
        "started_at": started_at,
        "deadline": started_at + settings["time"],
    }

    return {
        "message": "Round Started",
        "round_token": seal_state(game_round),
        "data": {
            "scrambled": scramble_word(chosen["word"]),
            "difficulty": difficulty,
            "time": settings["time"],
            "points": settings["points"],
            "hint_after": settings["time"] // 2,
        },
    }


@app.post("/hint")
def round_hint(data: RoundTokenSchema, auth: dict = Depends(verify_bearer_token)):
    game_round = load_round(data.round_token, auth)
    half_time = SETTINGS[game_round["difficulty"]]["time"] // 2

    if time.time() - game_round["started_at"] < half_time:
        raise HTTPException(
            status_code=400, detail=f"Hint unlocks after {half_time} seconds"
        )

    return {"message": "Successful Response", "data": {"hint": game_round["hint"]}}


@app.post("/guess")
def guess_word(data: GuessSchema, auth: dict = Depends(verify_bearer_token)):
    game_round = load_round(data.round_token, auth)
    word = game_round["word"]

    if time.time() > game_round["deadline"]:
        return {
            "message": f"Time's up! The word was {word}",
            "data": {"correct": False, "time_up": True, "word": word, "points": 0},
        }

    if not is_correct_guess(data.guess, word):
        return {
            "message": "Not quite, try again!",
            "data": {"correct": False, "time_up": False, "points": 0},
        }

    points = SETTINGS[game_round["difficulty"]]["points"]

    connection = connect_database()
    cursor = connection.cursor()

    try:
        totals = queries.add_leaderboard_points(
            cursor, game_round["user_id"], points, 0
        )
        if totals is None:
            raise HTTPException(status_code=404, detail="User not Found")

        first_solve = queries.record_scramble_round(
            cursor, game_round["round_id"], game_round["user_id"], word, points
        )
        if not first_solve:
            raise HTTPException(status_code=409, detail="Round already solved")

        connection.commit()

        return {
            "message": f"Correct! +{points} points",
            "data": {
                "correct": True,
                "time_up": False,
                "word": word,
                "points": points,
                "total_score": totals["total_score"],
            },
        }

    except HTTPException:
        connection.rollback()
        raise

    except Exception as e:
        connection.rollback()
        logger.error(f"Scramble guess error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()
