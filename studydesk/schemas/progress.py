"""Progress and streak schemas."""

from pydantic import Field

from studydesk.schemas.base import BaseSchema


class ProgressStatUpdate(BaseSchema):
    """Request to set mastery for a subject."""

    mastery_percent: float = Field(..., ge=0, le=100)


class ProgressStat(BaseSchema):
    """Mastery for one subject. At most one per subject per user."""

    subject: str = Field(..., min_length=1, max_length=255)
    mastery_percent: float = Field(..., ge=0, le=100)
    last_updated: int = Field(ge=0)


class StudyStreak(BaseSchema):
    """Consecutive study days. The zero value means no activity yet."""

    current_streak: int = Field(default=0, ge=0)
    last_study_date: int = Field(default=0, ge=0)
