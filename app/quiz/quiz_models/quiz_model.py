from pydantic import BaseModel, Field
from typing import Optional


class SessionTokenSchema(BaseModel):
    session_token: str = Field(..., min_length=1)


class AnswerSchema(SessionTokenSchema):
    option: Optional[str] = Field(
        default=None,
        description="Chosen option text. Leave empty when the timer ran out.",
        examples=["True"],
    )
