from fastapi import APIRouter, Depends, HTTPException
import logging

# Project Imports
from .quiz_models.quiz_model import SessionTokenSchema, AnswerSchema
from .questions import LEVELS, get_level
from .session import QuizSession, SessionError, SessionState, describe_level
from crud import queries
from database.connect_db import connect_database
from services.response_handler import verify_bearer_token
from services.session_token import seal_state, open_state

app = APIRouter()
logger = logging.getLogger(__name__)


def load_session(session_token: str, auth: dict) -> QuizSession:
    try:
        session = QuizSession.from_dict(open_state(session_token))
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail="Invalid quiz session")

    if str(session.user_id) != str(auth.get("id")):
        raise HTTPException(status_code=403, detail="This quiz session belongs to another user")

    return session


def check_session_progress(cursor, session: QuizSession) -> dict:
    """The stored progress row must still point at this session and step."""
    progress = queries.get_level_progress(cursor, session.user_id, session.level)

    if (
        not progress
        or progress["session_id"] != session.session_id
        or progress["current_question"] != session.answered
        or progress["session_step"] != session.step
    ):
        raise HTTPException(status_code=409, detail="Stale quiz session")

    return progress


def session_response(message: str, session: QuizSession) -> dict:
    return {
        "message": message,
        "session_token": seal_state(session.to_dict()),
        "data": session.view(),
    }


@app.get("/levels")
def get_levels():
    return {
        "message": "Successful Response",
        "data": [describe_level(index) for index in range(len(LEVELS))],
    }


@app.get("/levels/{level}")
def get_level_intro(level: int):
    if get_level(level) is None:
        raise HTTPException(status_code=404, detail="Level not found")

    return {"message": "Successful Response", "data": describe_level(level)}


@app.post("/levels/{level}/start")
def start_level(level: int, auth: dict = Depends(verify_bearer_token)):
    if get_level(level) is None:
        raise HTTPException(status_code=404, detail="Level not found")

    connection = connect_database()
    cursor = connection.cursor()
    user_id = auth.get("id")

    try:
        user = queries.get_user_by_id(cursor, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not Found")

        if level > user["level"]:
            raise HTTPException(status_code=403, detail="Level is locked")

        previous = queries.get_level_progress(cursor, user_id, level)

        session = QuizSession.new(user_id, level)
        session.begin()

        queries.save_progress(
            cursor,
            user_id,
            level,
            score=0,
            passed=bool(previous and previous["passed"]),
            current_question=0,
            session_id=session.session_id,
            session_step=session.step,
        )
        connection.commit()

        return session_response(f"Level {level + 1} Started", session)

    except HTTPException:
        connection.rollback()
        raise

    except Exception as e:
        connection.rollback()
        logger.error(f"Start level error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()


@app.post("/session")
def resume_session(data: SessionTokenSchema, auth: dict = Depends(verify_bearer_token)):
    session = load_session(data.session_token, auth)

    connection = connect_database()
    cursor = connection.cursor()

    try:
        check_session_progress(cursor, session)
        return {"message": "Successful Response", "data": session.view()}

    except HTTPException:
        raise

    except Exception as e:
        logger.error(f"Resume session error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()


@app.post("/session/answer")
def answer_question(data: AnswerSchema, auth: dict = Depends(verify_bearer_token)):
    session = load_session(data.session_token, auth)

    connection = connect_database()
    cursor = connection.cursor()

    try:
        progress = check_session_progress(cursor, session)

        feedback = session.answer(data.option)

        queries.save_progress(
            cursor,
            session.user_id,
            session.level,
            score=session.score,
            passed=progress["passed"],
            current_question=session.answered,
            session_id=session.session_id,
            session_step=session.step,
        )
        connection.commit()

        return session_response(feedback["message"], session)

    except HTTPException:
        connection.rollback()
        raise

    except SessionError as e:
        connection.rollback()
        raise HTTPException(status_code=409, detail=str(e))

    except ValueError as e:
        connection.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        connection.rollback()
        logger.error(f"Answer question error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()


@app.post("/session/next")
def next_question(data: SessionTokenSchema, auth: dict = Depends(verify_bearer_token)):
    session = load_session(data.session_token, auth)

    connection = connect_database()
    cursor = connection.cursor()

    try:
        progress = check_session_progress(cursor, session)

        state = session.advance()

        if state != SessionState.summary:
            queries.save_progress(
                cursor,
                session.user_id,
                session.level,
                score=session.score,
                passed=progress["passed"],
                current_question=session.answered,
                session_id=session.session_id,
                session_step=session.step,
            )
            connection.commit()

            return session_response("Next Question", session)

        result = session.result

        queries.save_progress(
            cursor,
            session.user_id,
            session.level,
            score=result["score"],
            passed=result["passed"] or progress["passed"],
            current_question=session.total,
            session_id=None,
        )

        if result["passed"]:
            queries.add_leaderboard_points(
                cursor,
                session.user_id,
                result["points_awarded"],
                result["next_level"],
            )

        connection.commit()

        if result["completed_all"]:
            message = "You've mastered all levels! Congrats!"
        elif result["passed"]:
            message = "Level Passed! Great job."
        else:
            message = "Level Failed. You can retry anytime."

        return session_response(message, session)

    except HTTPException:
        connection.rollback()
        raise

    except SessionError as e:
        connection.rollback()
        raise HTTPException(status_code=409, detail=str(e))

    except Exception as e:
        connection.rollback()
        logger.error(f"Next question error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        cursor.close()
        connection.close()
