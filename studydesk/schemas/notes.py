"""Note schemas."""

from pydantic import ConfigDict, Field, model_validator

from studydesk.schemas.base import BaseSchema, IDMixin


class NoteWrite(BaseSchema):
    """Schema for creating or updating a note. Updates replace every field."""

    # Markdown is stored verbatim
    model_config = ConfigDict(str_strip_whitespace=False, validate_assignment=True)

    title: str = Field(default="Untitled", min_length=1, max_length=255)
    content: str = ""  # Markdown
    topic: str = Field(default="", max_length=255)


class Note(NoteWrite, IDMixin):
    """Stored note."""

    created_at: int = Field(ge=0)
    updated_at: int = Field(ge=0)

    @model_validator(mode="after")
    def _updated_after_created(self) -> "Note":
        if self.updated_at < self.created_at:
            raise ValueError("updated_at must not precede created_at")
        return self
