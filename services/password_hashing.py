from passlib.context import CryptContext


pin_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_pin(pin: str) -> str:
    return pin_context.hash(pin)


def match_pin(pin: str | None, hashed_pin: str | None) -> bool:
    """A missing PIN or an account without one never matches."""
    if not pin or not hashed_pin:
        return False

    return pin_context.verify(pin, hashed_pin)
