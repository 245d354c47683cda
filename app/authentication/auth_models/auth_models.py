from pydantic import BaseModel, Field, field_validator
from typing import Annotated, Optional
import re

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.\- ]+$")


def clean_username(value: str) -> str:
    value = value.strip()

    if not 1 <= len(value) <= 32:
        raise ValueError("Username must be between 1 and 32 characters")
    if not USERNAME_PATTERN.match(value):
        raise ValueError(
            "Username may only contain letters, digits, spaces, '_', '.' and '-'"
        )

    return value


class LoginSchema(BaseModel):
    username: Annotated[str, Field(..., description="Discord username or display name")]
    pin: Optional[str] = Field(default=None, description="Only for PIN protected names")

    @field_validator("username")
    @classmethod
    def check_username(cls, value):
        return clean_username(value)

    model_config = {
        "json_schema_extra": {"example": {"username": "billions_fan"}}
    }


class RegisterSchema(BaseModel):
    username: Annotated[str, Field(...)]
    pin: Annotated[str, Field(..., pattern=r"^\d{4,8}$")]

    @field_validator("username")
    @classmethod
    def check_username(cls, value):
        return clean_username(value)

    model_config = {
        "json_schema_extra": {"example": {"username": "billions_fan", "pin": "4821"}}
    }
