"""Goal routes."""

from fastapi import APIRouter, status

from studydesk.api.deps import CurrentTenant, Store
from studydesk.schemas.base import CreatedResponse
from studydesk.schemas.goals import Goal, GoalCreate

router = APIRouter(prefix="/goals", tags=["goals"])


@router.post("/", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_goal(
    data: GoalCreate,
    tenant: CurrentTenant,
    store: Store,
) -> CreatedResponse:
    """Create an open goal."""
    goal_id = await store.create_goal(tenant, data.title, data.description, data.target_date)
    return CreatedResponse(id=goal_id)


@router.get("/", response_model=list[Goal])
async def list_goals(
    tenant: CurrentTenant,
    store: Store,
) -> list[Goal]:
    """List goals for the current user."""
    return await store.get_goals(tenant)


@router.post("/{goal_id}/complete", status_code=status.HTTP_204_NO_CONTENT)
async def complete_goal(
    goal_id: str,
    tenant: CurrentTenant,
    store: Store,
) -> None:
    """Mark a goal completed. Completing it again is a no-op; 404 if missing."""
    await store.complete_goal(tenant, goal_id)
