"""Goal schemas."""

from pydantic import Field

from studydesk.schemas.base import BaseSchema, IDMixin


class GoalCreate(BaseSchema):
    """Request to create a goal."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    target_date: int = Field(..., ge=0)  # epoch nanoseconds


class Goal(GoalCreate, IDMixin):
    """Stored goal. is_completed only ever goes from False to True."""

    is_completed: bool = False
    created_at: int = Field(ge=0)
