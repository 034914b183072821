"""Notes CRUD routes."""

from fastapi import APIRouter, status

from studydesk.api.deps import CurrentTenant, Store
from studydesk.schemas.base import CreatedResponse
from studydesk.schemas.notes import Note, NoteWrite

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("/", response_model=list[Note])
async def list_notes(
    tenant: CurrentTenant,
    store: Store,
) -> list[Note]:
    """List notes for the current user."""
    return await store.get_notes(tenant)


@router.post("/", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    data: NoteWrite,
    tenant: CurrentTenant,
    store: Store,
) -> CreatedResponse:
    """Create a new note."""
    note_id = await store.create_note(tenant, data.title, data.content, data.topic)
    return CreatedResponse(id=note_id)


@router.get("/{note_id}", response_model=Note)
async def get_note(
    note_id: str,
    tenant: CurrentTenant,
    store: Store,
) -> Note:
    """Get a specific note by ID."""
    return await store.get_note(tenant, note_id)


@router.put("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_note(
    note_id: str,
    data: NoteWrite,
    tenant: CurrentTenant,
    store: Store,
) -> None:
    """
    Update a note.

    Updating a note that does not exist is silently ignored.
    """
    await store.update_note(tenant, note_id, data.title, data.content, data.topic)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: str,
    tenant: CurrentTenant,
    store: Store,
) -> None:
    """Delete a note. Deleting a missing note succeeds."""
    await store.delete_note(tenant, note_id)
