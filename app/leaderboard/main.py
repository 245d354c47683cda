from fastapi import APIRouter, HTTPException, Depends, Query
import logging

# Project Imports
from .models.leaderboard_model import (
    SubmitScoreSchema,
    SyncSchema,
    LeaderboardResponse,
    SyncResponse,
)
from app.quiz.questions import get_level
from app.quiz.session import level_result
from crud import queries
from database.connect_db import connect_database
from helper.config import LEADERBOARD_DEFAULT_LIMIT, LEADERBOARD_MAX_LIMIT
from services.response_handler import verify_bearer_token

app = APIRouter()
logger = logging.getLogger(__name__)


class ScoreRejected(Exception):
    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


def rank_entries(rows: list) -> list:
    """Attach competition ranks (1, 2, 2, 4) to rows sorted by total_score."""
    ranked = []
    prev_score = None
    prev_rank = 0

    for idx, row in enumerate(rows):
        if row["total_score"] == prev_score:
            rank = prev_rank
        else:
            rank = idx + 1

        prev_score = row["total_score"]
        prev_rank = rank
        ranked.append({"rank": rank, **row})

    return ranked


def apply_score(cursor, user_id: int, entry: SubmitScoreSchema) -> dict:
    """Record one finished level played on the client."""
    level = get_level(entry.level)
    if level is None:
        raise ScoreRejected(404, "Level not found")

    if entry.total != level.per_session:
        raise ScoreRejected(
            400, f"Level {entry.level + 1} sessions have {level.per_session} questions"
        )

    user = queries.get_user_by_id(cursor, user_id)
    if user is None:
        raise ScoreRejected(404, "User not Found")

    if entry.level > user["level"]:
        raise ScoreRejected(403, "Level is locked")

    previous = queries.get_level_progress(cursor, user_id, entry.level)
    if previous and previous["session_id"]:
        raise ScoreRejected(409, "A quiz session is in progress for this level")

    result = level_result(entry.level, entry.score, entry.total)

    queries.save_progress(
        cursor,
        user_id,
        entry.level,
        score=entry.score,
        passed=result["passed"] or bool(previous and previous["passed"]),
        current_question=entry.total,
    )

    if result["passed"]:
        queries.add_leaderboard_points(
            cursor, user_id, result["points_awarded"], result["next_level"]
        )

    return result


@app.get("", response_model=LeaderboardResponse)
def get_leaderboard(
    limit: int = Query(LEADERBOARD_DEFAULT_LIMIT, ge=1, le=LEADERBOARD_MAX_LIMIT),
):
    connection = connect_database()
    cursor = connection.cursor()

    try:
        rows = queries.fetch_leaderboard(cursor, limit)
        return {"message": "Successful Response", "data": rank_entries(rows)}

    except Exception as e:
        logger.error(f"Leaderboard fetch error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()


@app.post("")
def submit_score(data: SubmitScoreSchema, auth: dict = Depends(verify_bearer_token)):
    connection = connect_database()
    cursor = connection.cursor()

    try:
        result = apply_score(cursor, auth.get("id"), data)
        connection.commit()

        return {"message": "Score Submitted", "data": result}

    except ScoreRejected as e:
        connection.rollback()
        raise HTTPException(status_code=e.status_code, detail=e.detail)

    except Exception as e:
        connection.rollback()
        logger.error(f"Submit score error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()


@app.post("/sync", response_model=SyncResponse)
def sync_scores(data: SyncSchema, auth: dict = Depends(verify_bearer_token)):
    connection = connect_database()
    cursor = connection.cursor()
    user_id = auth.get("id")

    try:
        results = []
        for entry in data.entries:
            summary = {"level": entry.level, "score": entry.score, "total": entry.total}

            try:
                result = apply_score(cursor, user_id, entry)
            except ScoreRejected as e:
                results.append({**summary, "error": e.detail})
                continue

            results.append(
                {
                    **summary,
                    "passed": result["passed"],
                    "points_awarded": result["points_awarded"],
                }
            )

        connection.commit()

        return {"message": "Leaderboard Synced", "data": results}

    except Exception as e:
        connection.rollback()
        logger.error(f"Leaderboard sync error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()
