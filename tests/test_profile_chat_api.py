"""Tests for profile and chat session API endpoints."""

from fastapi import status
from httpx import AsyncClient


class TestProfileApi:
    """Test suite for /profile."""

    async def test_create_get_update(self, client: AsyncClient, alice: dict, clock) -> None:
        payload = {"display_name": "Alice", "personality_mode": "strict_teacher", "preferred_language": "en"}

        created = await client.post("/profile/", json=payload, headers=alice)
        assert created.status_code == status.HTTP_201_CREATED
        assert created.json() == {**payload, "created_at": clock.now}

        clock.advance(days=1)
        updated = await client.put(
            "/profile/",
            json={"display_name": "Ally", "personality_mode": "friendly", "preferred_language": "es"},
            headers=alice,
        )
        assert updated.status_code == status.HTTP_200_OK

        fetched = (await client.get("/profile/", headers=alice)).json()
        assert fetched["display_name"] == "Ally"
        assert fetched["created_at"] == created.json()["created_at"]

    async def test_create_twice_is_409(self, client: AsyncClient, alice: dict) -> None:
        payload = {"display_name": "Alice"}
        await client.post("/profile/", json=payload, headers=alice)

        response = await client.post("/profile/", json=payload, headers=alice)

        assert response.status_code == status.HTTP_409_CONFLICT

    async def test_get_or_update_missing_is_404(self, client: AsyncClient, alice: dict) -> None:
        assert (await client.get("/profile/", headers=alice)).status_code == status.HTTP_404_NOT_FOUND
        response = await client.put("/profile/", json={"display_name": "Alice"}, headers=alice)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_unknown_mode_is_422(self, client: AsyncClient, alice: dict) -> None:
        response = await client.post(
            "/profile/", json={"display_name": "Alice", "personality_mode": "sarcastic"}, headers=alice
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT


class TestChatApi:
    """Test suite for /chat/sessions."""

    async def test_session_lifecycle(self, client: AsyncClient, alice: dict) -> None:
        created = await client.post("/chat/sessions/", json={"title": "Algebra help"}, headers=alice)
        assert created.status_code == status.HTTP_201_CREATED
        session_id = created.json()["id"]

        for role, content in [("user", "Solve x+1=2"), ("assistant", "x = 1")]:
            response = await client.post(
                f"/chat/sessions/{session_id}/messages",
                json={"role": role, "content": content},
                headers=alice,
            )
            assert response.status_code == status.HTTP_204_NO_CONTENT

        messages = (await client.get(f"/chat/sessions/{session_id}/messages", headers=alice)).json()
        assert [(m["role"], m["content"]) for m in messages] == [("user", "Solve x+1=2"), ("assistant", "x = 1")]

        sessions = (await client.get("/chat/sessions/", headers=alice)).json()
        assert len(sessions) == 1
        assert sessions[0]["title"] == "Algebra help"
        assert isinstance(sessions[0]["messages"], list)
        assert len(sessions[0]["messages"]) == 2

        deleted = await client.delete(f"/chat/sessions/{session_id}", headers=alice)
        assert deleted.status_code == status.HTTP_204_NO_CONTENT
        again = await client.delete(f"/chat/sessions/{session_id}", headers=alice)
        assert again.status_code == status.HTTP_204_NO_CONTENT
        assert (await client.get("/chat/sessions/", headers=alice)).json() == []

    async def test_message_to_missing_session_is_404(self, client: AsyncClient, alice: dict) -> None:
        response = await client.post(
            "/chat/sessions/chat-missing/messages", json={"role": "user", "content": "hi"}, headers=alice
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_invalid_role_is_422(self, client: AsyncClient, alice: dict) -> None:
        session_id = (await client.post("/chat/sessions/", json={}, headers=alice)).json()["id"]

        response = await client.post(
            f"/chat/sessions/{session_id}/messages", json={"role": "system", "content": "x"}, headers=alice
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    async def test_other_user_cannot_read_session(self, client: AsyncClient, alice: dict, bob: dict) -> None:
        session_id = (await client.post("/chat/sessions/", json={"title": "Mine"}, headers=alice)).json()["id"]

        response = await client.get(f"/chat/sessions/{session_id}/messages", headers=bob)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert (await client.get("/chat/sessions/", headers=bob)).json() == []
