"""Pure scheduling rules: flashcard review intervals and study streaks."""

from studydesk.scheduling.review import (
    DEFAULT_EASE_FACTOR,
    MIN_EASE_FACTOR,
    ReviewOutcome,
    ReviewRating,
    schedule_review,
)
from studydesk.scheduling.streak import StreakUpdate, next_streak

__all__ = [
    "DEFAULT_EASE_FACTOR",
    "MIN_EASE_FACTOR",
    "ReviewOutcome",
    "ReviewRating",
    "schedule_review",
    "StreakUpdate",
    "next_streak",
]
