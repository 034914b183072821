"""Quiz result schemas."""

from pydantic import Field, model_validator

from studydesk.schemas.base import BaseSchema, IDMixin


class QuizResultCreate(BaseSchema):
    """Request to record a finished quiz."""

    subject: str = Field(..., min_length=1, max_length=255)
    score: int = Field(..., ge=0)
    total_questions: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _score_within_total(self) -> "QuizResultCreate":
        if self.score > self.total_questions:
            raise ValueError("score cannot exceed total_questions")
        return self


class QuizResult(QuizResultCreate, IDMixin):
    """Recorded quiz result. Never modified once stored."""

    timestamp: int = Field(ge=0)
