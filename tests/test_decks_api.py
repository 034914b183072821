"""Tests for flashcard deck API endpoints."""

import pytest
from fastapi import status
from httpx import AsyncClient

from studydesk.clock import NS_PER_DAY
from studydesk.config import get_settings


async def _deck_with_card(client: AsyncClient, headers: dict) -> tuple[str, str]:
    deck_id = (await client.post("/decks/", json={"name": "Bio", "subject": "Biology"}, headers=headers)).json()["id"]
    card_id = (
        await client.post(f"/decks/{deck_id}/cards", json={"front": "Q", "back": "A"}, headers=headers)
    ).json()["id"]
    return deck_id, card_id


class TestDecksApi:
    """Test suite for /decks."""

    async def test_create_deck_and_card(self, client: AsyncClient, alice: dict, clock) -> None:
        deck_id, card_id = await _deck_with_card(client, alice)

        cards = (await client.get(f"/decks/{deck_id}/cards", headers=alice)).json()
        assert cards == [
            {
                "id": card_id,
                "front": "Q",
                "back": "A",
                "difficulty": 1,
                "next_review": clock.now,
                "interval": 0,
                "ease_factor": 2.5,
            }
        ]

        decks = (await client.get("/decks/", headers=alice)).json()
        assert [(d["id"], d["name"], d["subject"]) for d in decks] == [(deck_id, "Bio", "Biology")]
        assert decks[0]["cards"] == cards

    async def test_client_computed_review(self, client: AsyncClient, alice: dict, clock) -> None:
        deck_id, card_id = await _deck_with_card(client, alice)

        response = await client.put(
            f"/decks/{deck_id}/cards/{card_id}/review",
            json={"interval": 1, "ease_factor": 2.5},
            headers=alice,
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        [card] = (await client.get(f"/decks/{deck_id}/cards", headers=alice)).json()
        assert card["interval"] == 1
        assert card["next_review"] == clock.now + NS_PER_DAY

    async def test_client_review_below_ease_floor_is_422(self, client: AsyncClient, alice: dict) -> None:
        deck_id, card_id = await _deck_with_card(client, alice)

        response = await client.put(
            f"/decks/{deck_id}/cards/{card_id}/review",
            json={"interval": 1, "ease_factor": 1.0},
            headers=alice,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    async def test_client_review_with_infinite_ease_is_422(self, client: AsyncClient, alice: dict) -> None:
        deck_id, card_id = await _deck_with_card(client, alice)

        response = await client.put(
            f"/decks/{deck_id}/cards/{card_id}/review",
            content=b'{"interval": 1, "ease_factor": Infinity}',
            headers={**alice, "Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        rated = await client.post(f"/decks/{deck_id}/cards/{card_id}/review", json={"rating": "good"}, headers=alice)
        assert rated.status_code == status.HTTP_200_OK
        assert rated.json()["ease_factor"] == 2.5

    async def test_client_review_can_be_disabled(
        self, client: AsyncClient, alice: dict, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        deck_id, card_id = await _deck_with_card(client, alice)
        monkeypatch.setattr(get_settings(), "legacy_card_review_enabled", False)

        response = await client.put(
            f"/decks/{deck_id}/cards/{card_id}/review",
            json={"interval": 30, "ease_factor": 5.0},
            headers=alice,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_rating_review(self, client: AsyncClient, alice: dict, clock) -> None:
        deck_id, card_id = await _deck_with_card(client, alice)

        response = await client.post(
            f"/decks/{deck_id}/cards/{card_id}/review", json={"rating": "hard"}, headers=alice
        )

        assert response.status_code == status.HTTP_200_OK
        card = response.json()
        assert card["interval"] == 1
        assert card["ease_factor"] == pytest.approx(2.35)
        assert card["next_review"] == clock.now + NS_PER_DAY

    async def test_unknown_rating_is_422(self, client: AsyncClient, alice: dict) -> None:
        deck_id, card_id = await _deck_with_card(client, alice)

        response = await client.post(
            f"/decks/{deck_id}/cards/{card_id}/review", json={"rating": "meh"}, headers=alice
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    async def test_due_cards(self, client: AsyncClient, alice: dict) -> None:
        deck_id, card_id = await _deck_with_card(client, alice)

        due = (await client.get(f"/decks/{deck_id}/cards/due", headers=alice)).json()
        assert [c["id"] for c in due] == [card_id]

        await client.post(f"/decks/{deck_id}/cards/{card_id}/review", json={"rating": "again"}, headers=alice)
        assert (await client.get(f"/decks/{deck_id}/cards/due", headers=alice)).json() == []

    async def test_missing_deck_is_404(self, client: AsyncClient, alice: dict) -> None:
        for method, url, body in [
            ("GET", "/decks/deck-missing/cards", None),
            ("POST", "/decks/deck-missing/cards", {"front": "Q", "back": "A"}),
            ("PUT", "/decks/deck-missing/cards/c/review", {"interval": 1, "ease_factor": 2.5}),
        ]:
            response = await client.request(method, url, json=body, headers=alice)
            assert response.status_code == status.HTTP_404_NOT_FOUND, url

    async def test_other_user_cannot_add_cards(self, client: AsyncClient, alice: dict, bob: dict) -> None:
        deck_id, _ = await _deck_with_card(client, alice)

        response = await client.post(f"/decks/{deck_id}/cards", json={"front": "X", "back": "Y"}, headers=bob)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert len((await client.get(f"/decks/{deck_id}/cards", headers=alice)).json()) == 1
