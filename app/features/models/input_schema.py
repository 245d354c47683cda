from pydantic import BaseModel, Field, field_validator
from typing import Optional, Union


class FeedbackSchema(BaseModel):
    user_id: Optional[int] = Field(default=None)
    username: Optional[str] = Field(default=None, max_length=64)
    rating: Optional[int] = Field(default=None, ge=0, le=5, description="0 means no rating")
    feedback: Optional[str] = Field(default=None, max_length=5000)
    level: Optional[Union[str, int]] = Field(default=None, examples=["Level 2: Pro"])

    @field_validator("rating")
    @classmethod
    def zero_is_no_rating(cls, value):
        return value or None

    @field_validator("feedback", "username")
    @classmethod
    def blank_is_missing(cls, value):
        if value is None:
            return None
        return value.strip() or None
