"""API routes for chat session transcripts."""

from fastapi import APIRouter, status

from studydesk.api.deps import CurrentTenant, Store
from studydesk.schemas.base import CreatedResponse
from studydesk.schemas.chat import ChatSession, ChatSessionCreate, Message, MessageCreate

router = APIRouter(prefix="/chat/sessions", tags=["chat"])


@router.post("/", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_chat_session(
    data: ChatSessionCreate,
    tenant: CurrentTenant,
    store: Store,
) -> CreatedResponse:
    """Start a new, empty chat session."""
    session_id = await store.create_chat_session(tenant, data.title)
    return CreatedResponse(id=session_id)


@router.get("/", response_model=list[ChatSession])
async def list_chat_sessions(
    tenant: CurrentTenant,
    store: Store,
) -> list[ChatSession]:
    """List sessions with their messages, newest session first."""
    return await store.get_chat_sessions(tenant)


@router.get("/{session_id}/messages", response_model=list[Message])
async def get_chat_messages(
    session_id: str,
    tenant: CurrentTenant,
    store: Store,
) -> list[Message]:
    """Messages of one session in the order they were added."""
    return await store.get_chat_messages(tenant, session_id)


@router.post("/{session_id}/messages", status_code=status.HTTP_204_NO_CONTENT)
async def add_message(
    session_id: str,
    data: MessageCreate,
    tenant: CurrentTenant,
    store: Store,
) -> None:
    """Append a message. 404 if the session does not exist."""
    await store.add_message(tenant, session_id, data.role, data.content)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chat_session(
    session_id: str,
    tenant: CurrentTenant,
    store: Store,
) -> None:
    """Delete a session. Deleting a missing session succeeds."""
    await store.delete_chat_session(tenant, session_id)
