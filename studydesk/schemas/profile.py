"""Profile schemas."""

from enum import Enum as PyEnum

from pydantic import Field

from studydesk.schemas.base import BaseSchema


class PersonalityMode(str, PyEnum):
    """Tone the assistant takes with this user."""

    STRICT_TEACHER = "strict_teacher"
    FRIENDLY = "friendly"
    PRO_CODER = "pro_coder"


class ProfileWrite(BaseSchema):
    """Schema for creating or replacing a profile."""

    display_name: str = Field(..., min_length=1, max_length=255)
    personality_mode: PersonalityMode = PersonalityMode.FRIENDLY
    preferred_language: str = Field(default="en", min_length=1, max_length=64)


class Profile(ProfileWrite):
    """Stored profile. created_at never changes after creation."""

    created_at: int = Field(ge=0)
