"""API routes package."""

from studydesk.api.routes import (
    chat,
    decks,
    goals,
    notes,
    profile,
    progress,
    quizzes,
)

__all__ = [
    "chat",
    "decks",
    "goals",
    "notes",
    "profile",
    "progress",
    "quizzes",
]
