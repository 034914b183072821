"""Pydantic schemas for chat sessions."""

from enum import Enum as PyEnum

from pydantic import BaseModel, ConfigDict, Field

from studydesk.schemas.base import BaseSchema, IDMixin


class ChatRole(str, PyEnum):
    """Role in chat conversation."""

    USER = "user"
    ASSISTANT = "assistant"


# Request schemas
class ChatSessionCreate(BaseModel):
    """Request to create a new chat session."""

    title: str = Field(default="New Conversation", min_length=1, max_length=255)


class MessageCreate(BaseModel):
    """Request to append a message to a session."""

    role: ChatRole
    content: str = Field(..., min_length=1, max_length=100_000)


# Stored / response schemas
class Message(BaseSchema):
    """One chat message. Order in the session is insertion order, not timestamp."""

    model_config = ConfigDict(str_strip_whitespace=False, validate_assignment=True)

    role: ChatRole
    content: str
    timestamp: int = Field(ge=0)


class ChatSession(BaseSchema, IDMixin):
    """Chat session with its full, append-only message history."""

    title: str
    created_at: int = Field(ge=0)
    messages: list[Message] = Field(default_factory=list)
