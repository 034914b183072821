"""Progress statistics and study streak routes."""

from fastapi import APIRouter, status

from studydesk.api.deps import CurrentTenant, Store
from studydesk.schemas.progress import ProgressStat, ProgressStatUpdate, StudyStreak

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("/stats", response_model=list[ProgressStat])
async def list_progress_stats(
    tenant: CurrentTenant,
    store: Store,
) -> list[ProgressStat]:
    """Mastery per subject."""
    return await store.get_progress_stats(tenant)


@router.put("/stats/{subject}", status_code=status.HTTP_204_NO_CONTENT)
async def update_progress_stat(
    subject: str,
    data: ProgressStatUpdate,
    tenant: CurrentTenant,
    store: Store,
) -> None:
    """Set mastery for a subject, replacing any earlier value."""
    await store.update_progress_stat(tenant, subject, data.mastery_percent)


@router.get("/streak", response_model=StudyStreak)
async def get_study_streak(
    tenant: CurrentTenant,
    store: Store,
) -> StudyStreak:
    """Current streak; zeros if the user has never studied."""
    return await store.get_study_streak(tenant)


@router.post("/streak/activity", response_model=StudyStreak)
async def record_study_activity(
    tenant: CurrentTenant,
    store: Store,
) -> StudyStreak:
    """Record that the user studied now and return the updated streak."""
    return await store.record_study_activity(tenant)
