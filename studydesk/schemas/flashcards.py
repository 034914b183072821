"""Flashcard deck and review schemas."""

from pydantic import BaseModel, Field

from studydesk.scheduling import DEFAULT_EASE_FACTOR, MIN_EASE_FACTOR, ReviewRating
from studydesk.schemas.base import BaseSchema, IDMixin


# Request schemas
class DeckCreate(BaseSchema):
    """Request to create a deck."""

    name: str = Field(..., min_length=1, max_length=255)
    subject: str = Field(default="", max_length=255)


class CardCreate(BaseSchema):
    """Request to add a card to a deck."""

    front: str = Field(..., min_length=1, max_length=10_000)
    back: str = Field(..., min_length=1, max_length=10_000)


class CardReviewUpdate(BaseModel):
    """
    Client-computed review result (legacy).

    The caller has already applied the scheduling rule and sends the result.
    Prefer CardReviewRating, which lets the server do the arithmetic.
    """

    interval: int = Field(..., ge=0)
    ease_factor: float = Field(..., ge=MIN_EASE_FACTOR, allow_inf_nan=False)


class CardReviewRating(BaseModel):
    """Request to review a card with a qualitative rating."""

    rating: ReviewRating


# Stored / response schemas
class Flashcard(BaseSchema, IDMixin):
    """A card. interval is in days; next_review is epoch nanoseconds."""

    front: str
    back: str
    difficulty: int = Field(default=1, ge=1)  # 1 = easiest
    next_review: int = Field(ge=0)
    interval: int = Field(default=0, ge=0)
    ease_factor: float = Field(default=DEFAULT_EASE_FACTOR, ge=MIN_EASE_FACTOR)


class FlashcardDeck(BaseSchema, IDMixin):
    """Deck with its cards in insertion order."""

    name: str
    subject: str
    cards: list[Flashcard] = Field(default_factory=list)
