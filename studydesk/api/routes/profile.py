"""Profile routes. One profile per user."""

from fastapi import APIRouter, status

from studydesk.api.deps import CurrentTenant, Store
from studydesk.schemas.profile import Profile, ProfileWrite

router = APIRouter(prefix="/profile", tags=["profile"])


@router.post("/", response_model=Profile, status_code=status.HTTP_201_CREATED)
async def create_profile(
    data: ProfileWrite,
    tenant: CurrentTenant,
    store: Store,
) -> Profile:
    """Create the profile. 409 if one already exists."""
    return await store.create_profile(
        tenant, data.display_name, data.personality_mode, data.preferred_language
    )


@router.put("/", response_model=Profile)
async def update_profile(
    data: ProfileWrite,
    tenant: CurrentTenant,
    store: Store,
) -> Profile:
    """Replace every profile field except created_at. 404 if there is no profile."""
    return await store.update_profile(
        tenant, data.display_name, data.personality_mode, data.preferred_language
    )


@router.get("/", response_model=Profile)
async def get_profile(
    tenant: CurrentTenant,
    store: Store,
) -> Profile:
    """Get the current user's profile."""
    return await store.get_profile(tenant)
