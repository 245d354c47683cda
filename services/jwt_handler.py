from jose import jwt, JWTError
from datetime import datetime, timezone, timedelta

# Project Imports
from helper.config import JWT_ALGORITHM, JWT_SECRET_KEY, ACCESS_TOKEN_EXPIRY


def get_access_token(user_info: dict, expiry_minutes: int = ACCESS_TOKEN_EXPIRY):
    user_data = user_info.copy()

    expiry_time = datetime.now(timezone.utc) + timedelta(minutes=expiry_minutes)
    user_data.update({"exp": expiry_time, "type": "access_token"})

    access_token = jwt.encode(
        claims=user_data, algorithm=JWT_ALGORITHM, key=JWT_SECRET_KEY
    )

    return access_token


def decode_jwt_token(token: str):
    decoded_token = jwt.decode(token=token, key=JWT_SECRET_KEY, algorithms=JWT_ALGORITHM)
    return decoded_token


def verify_token(token: str) -> dict | None:
    try:
        payload = decode_jwt_token(token)
    except JWTError:
        return None

    if payload.get("id") is None or payload.get("type") != "access_token":
        return None

    if datetime.now(timezone.utc).timestamp() > payload.get("exp", 0):
        return None

    return payload
