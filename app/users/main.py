from fastapi import APIRouter, HTTPException, Depends
import logging

# Project Imports
from .models.user_model import ProgressSchema
from app.quiz.questions import get_level
from crud import queries
from database.connect_db import connect_database
from services.response_handler import verify_bearer_token

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/stats")
def user_stats(auth: dict = Depends(verify_bearer_token)):
    connection = connect_database()
    cursor = connection.cursor()

    try:
        stats = queries.fetch_user_stats(cursor, auth.get("id"))
        return {"message": "Successful Response", "data": stats}

    except Exception as e:
        logger.error(f"User stats error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()


@router.get("/progress")
def user_progress(auth: dict = Depends(verify_bearer_token)):
    connection = connect_database()
    cursor = connection.cursor()

    try:
        progress = queries.get_progress(cursor, auth.get("id"))

        result = [
            {
                "level": row["level"],
                "score": row["score"],
                "passed": row["passed"],
                "current_question": row["current_question"],
                "in_session": row["session_id"] is not None,
                "updated_at": row["updated_at"],
            }
            for row in progress
        ]

        return {"message": "Successful Response", "data": result}

    except Exception as e:
        logger.error(f"User progress error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()


@router.post("/progress")
def save_user_progress(data: ProgressSchema, auth: dict = Depends(verify_bearer_token)):
    level = get_level(data.level)
    if level is None:
        raise HTTPException(status_code=404, detail="Level not found")

    if data.score > level.per_session or data.current_question > level.per_session:
        raise HTTPException(
            status_code=400,
            detail=f"Level {data.level + 1} only has {level.per_session} questions",
        )

    connection = connect_database()
    cursor = connection.cursor()

    try:
        previous = queries.get_level_progress(cursor, auth.get("id"), data.level)

        # Server-run sessions own their row until they finish
        if previous and previous["session_id"]:
            raise HTTPException(
                status_code=409, detail="A quiz session is in progress for this level"
            )

        progress_id = queries.save_progress(
            cursor,
            auth.get("id"),
            data.level,
            score=data.score,
            passed=data.passed or bool(previous and previous["passed"]),
            current_question=data.current_question,
        )
        connection.commit()

        return {"message": "Progress Saved", "id": progress_id}

    except HTTPException:
        connection.rollback()
        raise

    except Exception as e:
        connection.rollback()
        logger.error(f"Save progress error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()


@router.post("/reset")
def reset_progress(auth: dict = Depends(verify_bearer_token)):
    connection = connect_database()
    cursor = connection.cursor()

    try:
        deleted_rows = queries.reset_user_progress(cursor, auth.get("id"))
        connection.commit()

        return {"message": "Your progress has been reset!", "deleted": deleted_rows}

    except Exception as e:
        connection.rollback()
        logger.error(f"Reset progress error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()
