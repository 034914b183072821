"""Flashcard deck routes, including review scheduling."""

from fastapi import APIRouter, HTTPException, status

from studydesk.api.deps import CurrentTenant, Store
from studydesk.config import get_settings
from studydesk.schemas.base import CreatedResponse
from studydesk.schemas.flashcards import (
    CardCreate,
    CardReviewRating,
    CardReviewUpdate,
    DeckCreate,
    Flashcard,
    FlashcardDeck,
)

router = APIRouter(prefix="/decks", tags=["flashcards"])


@router.post("/", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_deck(
    data: DeckCreate,
    tenant: CurrentTenant,
    store: Store,
) -> CreatedResponse:
    """Create an empty deck."""
    deck_id = await store.create_deck(tenant, data.name, data.subject)
    return CreatedResponse(id=deck_id)


@router.get("/", response_model=list[FlashcardDeck])
async def list_decks(
    tenant: CurrentTenant,
    store: Store,
) -> list[FlashcardDeck]:
    """List decks with their cards."""
    return await store.get_decks(tenant)


@router.post("/{deck_id}/cards", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_card(
    deck_id: str,
    data: CardCreate,
    tenant: CurrentTenant,
    store: Store,
) -> CreatedResponse:
    """Add a card, due immediately. 404 if the deck does not exist."""
    card_id = await store.add_card(tenant, deck_id, data.front, data.back)
    return CreatedResponse(id=card_id)


@router.get("/{deck_id}/cards", response_model=list[Flashcard])
async def get_deck_cards(
    deck_id: str,
    tenant: CurrentTenant,
    store: Store,
) -> list[Flashcard]:
    """All cards of a deck in the order they were added."""
    return await store.get_deck_cards(tenant, deck_id)


@router.get("/{deck_id}/cards/due", response_model=list[Flashcard])
async def get_due_cards(
    deck_id: str,
    tenant: CurrentTenant,
    store: Store,
) -> list[Flashcard]:
    """Cards whose next review time has passed."""
    return await store.get_due_cards(tenant, deck_id)


@router.post("/{deck_id}/cards/{card_id}/review", response_model=Flashcard)
async def review_card(
    deck_id: str,
    card_id: str,
    data: CardReviewRating,
    tenant: CurrentTenant,
    store: Store,
) -> Flashcard:
    """Rate a card (again/hard/good/easy) and return it rescheduled."""
    return await store.review_card(tenant, deck_id, card_id, data.rating)


@router.put("/{deck_id}/cards/{card_id}/review", status_code=status.HTTP_204_NO_CONTENT)
async def update_card_review(
    deck_id: str,
    card_id: str,
    data: CardReviewUpdate,
    tenant: CurrentTenant,
    store: Store,
) -> None:
    """
    Store an interval and ease factor computed by the client.

    Kept for older clients. The server cannot tell whether the values follow
    the scheduling rule, so deployments can turn this off with
    LEGACY_CARD_REVIEW_ENABLED=false and use POST .../review instead.
    An unknown card_id is ignored.
    """
    if not get_settings().legacy_card_review_enabled:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Client-computed reviews are disabled; POST a rating instead.",
        )
    await store.update_card_review(tenant, deck_id, card_id, data.interval, data.ease_factor)
