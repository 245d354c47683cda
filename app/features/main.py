from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import JSONResponse
import logging
import aiosmtplib

# Project Imports
from .models.input_schema import FeedbackSchema
from crud.crud import CRUD
from database.connect_db import connect_database
from helper.config import FEEDBACK_TO_EMAIL
from messages.feedback_email import feedback_email_body, feedback_email_subject
from services.email_send import send_email, email_is_configured
from services.response_handler import verify_bearer_token

app = APIRouter()
logger = logging.getLogger(__name__)

FEEDBACK_COLUMNS = [
    "id",
    "user_id",
    "username",
    "rating",
    "feedback_text",
    "context_level",
    "created_at",
]


async def notify_feedback(data: FeedbackSchema) -> bool:
    if not FEEDBACK_TO_EMAIL or not email_is_configured():
        logger.warning("Missing email settings. Skipping feedback notification.")
        return False

    try:
        await send_email(
            subject=feedback_email_subject(data.level),
            to_whom=FEEDBACK_TO_EMAIL,
            body=feedback_email_body(
                data.username, data.level, data.rating, data.feedback
            ),
            is_html=True,
        )
    except (aiosmtplib.SMTPException, OSError) as e:
        logger.error(f"Feedback email error: {e}")
        return False

    return True


@app.post("/feedback")
async def submit_feedback(data: FeedbackSchema):
    if not data.feedback and not data.rating:
        raise HTTPException(
            status_code=400, detail="Feedback text or a rating is required."
        )

    feedback_row = {
        "user_id": data.user_id,
        "username": data.username or "Anonymous",
        "rating": data.rating,
        "feedback_text": data.feedback,
        "context_level": str(data.level) if data.level is not None else None,
    }

    stored = True
    try:
        CRUD(connect_database, "user_feedback").create_method(feedback_row)
    except HTTPException as e:
        stored = False
        logger.error(f"Feedback insert error: {e.detail}")

    # The notification still goes out when the insert failed
    emailed = await notify_feedback(data)

    if not stored:
        return JSONResponse(
            status_code=500,
            content={
                "ok": False,
                "emailed": emailed,
                "message": "Feedback received but database save failed.",
            },
        )

    return {
        "ok": True,
        "emailed": emailed,
        "message": "Feedback successfully received and saved.",
    }


@app.get("/feedback/{feedback_id}")
def get_feedback(feedback_id: int, auth: dict = Depends(verify_bearer_token)):
    feedback = CRUD(connect_database, "user_feedback", FEEDBACK_COLUMNS).read_method_each(
        feedback_id
    )
    return {"message": "Successful Response", "data": feedback}
