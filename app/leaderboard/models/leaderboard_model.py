from pydantic import BaseModel, Field, model_validator
from typing import List, Optional


class SubmitScoreSchema(BaseModel):
    level: int = Field(..., ge=0, examples=[0])
    score: int = Field(..., ge=0, examples=[8])
    total: int = Field(..., gt=0, examples=[10])

    @model_validator(mode="after")
    def check_score(self):
        if self.score > self.total:
            raise ValueError("Score cannot be more than the total questions")
        return self


class SyncSchema(BaseModel):
    entries: List[SubmitScoreSchema] = Field(..., min_length=1, max_length=20)


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: int
    username: str
    total_score: int
    max_level: int


class LeaderboardResponse(BaseModel):
    message: str
    data: List[LeaderboardEntry]


class SyncResult(BaseModel):
    level: int
    score: int
    total: int
    passed: Optional[bool] = None
    points_awarded: int = 0
    error: Optional[str] = None


class SyncResponse(BaseModel):
    message: str
    data: List[SyncResult]
