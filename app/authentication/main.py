from fastapi import APIRouter, HTTPException, Depends
import logging
import random

# Project Imports
from .auth_models.auth_models import LoginSchema, RegisterSchema
from crud import queries
from database.connect_db import connect_database
from services.jwt_handler import get_access_token
from services.password_hashing import hash_pin, match_pin
from services.response_handler import verify_bearer_token

app = APIRouter()
logger = logging.getLogger(__name__)

GUEST_NAME_ATTEMPTS = 5


def login_response(message: str, user: dict, created: bool) -> dict:
    access_token = get_access_token({"id": user["id"], "username": user["username"]})

    return {
        "message": message,
        "user": queries.public_user(user),
        "created": created,
        "access_token": access_token,
        "token_type": "bearer",
    }


def generate_guest_name() -> str:
    return f"Guest_{random.randint(0, 9999)}"


@app.get("/")
def auth_index_page():
    return {"message": "This is Authentication API for Billions Quiz Arena"}


@app.post("/login")
def login_user(data: LoginSchema):
    """Log in with a display name, creating the user on first sight."""
    connection = connect_database()
    cursor = connection.cursor()

    try:
        user, created = queries.get_or_create_user(cursor, data.username)

        if user["hashed_pin"]:
            if not match_pin(data.pin, user["hashed_pin"]):
                raise HTTPException(status_code=401, detail="Invalid username or PIN")

        connection.commit()

        if created:
            return login_response(f"Welcome, {user['username']}! You're in.", user, True)

        return login_response(f"Welcome back, {user['username']}!", user, False)

    except HTTPException:
        connection.rollback()
        raise

    except Exception as e:
        connection.rollback()
        logger.error(f"Login error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()


@app.post("/guest")
def login_guest():
    connection = connect_database()
    cursor = connection.cursor()

    try:
        for _ in range(GUEST_NAME_ATTEMPTS):
            user, created = queries.get_or_create_user(cursor, generate_guest_name())

            # A PIN protected name is not up for grabs
            if not user["hashed_pin"]:
                connection.commit()
                return login_response(
                    f"Welcome, {user['username']}! You're in.", user, created
                )

        raise HTTPException(status_code=503, detail="Could not find a free guest name")

    except HTTPException:
        connection.rollback()
        raise

    except Exception as e:
        connection.rollback()
        logger.error(f"Guest login error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()


@app.post("/register", status_code=201)
def register_user(data: RegisterSchema):
    connection = connect_database()
    cursor = connection.cursor()

    try:
        if queries.get_user_by_username(cursor, data.username):
            raise HTTPException(status_code=409, detail="User already exists")

        user = queries.create_user(cursor, data.username, hash_pin(data.pin))
        if not user:
            raise HTTPException(status_code=409, detail="User already exists")

        connection.commit()

        return login_response(f"Welcome, {user['username']}! You're in.", user, True)

    except HTTPException:
        connection.rollback()
        raise

    except Exception as e:
        connection.rollback()
        logger.error(f"Register error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()


@app.get("/me")
def current_user(auth: dict = Depends(verify_bearer_token)):
    connection = connect_database()
    cursor = connection.cursor()

    try:
        user = queries.get_user_by_id(cursor, auth.get("id"))
        if user is None:
            raise HTTPException(status_code=404, detail="User not Found")

        return {"user": queries.public_user(user)}

    except HTTPException:
        raise

    except Exception as e:
        logger.error(f"Current user error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()
