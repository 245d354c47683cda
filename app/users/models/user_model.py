from pydantic import BaseModel, Field


class ProgressSchema(BaseModel):
    level: int = Field(..., ge=0, examples=[0])
    score: int = Field(..., ge=0, examples=[7])
    passed: bool = Field(default=False)
    current_question: int = Field(..., ge=0, examples=[10])
