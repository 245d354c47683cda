from pydantic import BaseModel, Field
from enum import Enum


class Difficulty(str, Enum):
    easy = "Easy"
    medium = "Medium"
    hard = "Hard"


class StartRoundSchema(BaseModel):
    difficulty: Difficulty = Field(..., examples=["Easy"])


class RoundTokenSchema(BaseModel):
    round_token: str = Field(..., min_length=1)


class GuessSchema(RoundTokenSchema):
    guess: str = Field(..., min_length=1, max_length=64, examples=["trust"])
