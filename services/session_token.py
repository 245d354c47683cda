import json
from cryptography.fernet import Fernet, InvalidToken
from fastapi import HTTPException

# Project Imports
from helper.config import ENCRYPTION_KEY

fernet = Fernet(ENCRYPTION_KEY)

SESSION_TOKEN_TTL = 24 * 60 * 60  # 1 Day


def seal_state(state: dict) -> str:
    return fernet.encrypt(json.dumps(state).encode()).decode()


def open_state(token: str, ttl: int = SESSION_TOKEN_TTL) -> dict:
    try:
        decrypted = fernet.decrypt(token.encode(), ttl=ttl)
    except InvalidToken:
        raise HTTPException(status_code=400, detail="Invalid or Expired Token")

    return json.loads(decrypted)
