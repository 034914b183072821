"""Quiz result routes. Results are append-only."""

from fastapi import APIRouter, status

from studydesk.api.deps import CurrentTenant, Store
from studydesk.schemas.base import CreatedResponse
from studydesk.schemas.quizzes import QuizResult, QuizResultCreate

router = APIRouter(prefix="/quiz-results", tags=["quizzes"])


@router.post("/", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def record_quiz_result(
    data: QuizResultCreate,
    tenant: CurrentTenant,
    store: Store,
) -> CreatedResponse:
    """Record a finished quiz."""
    result_id = await store.record_quiz_result(tenant, data.subject, data.score, data.total_questions)
    return CreatedResponse(id=result_id)


@router.get("/", response_model=list[QuizResult])
async def list_quiz_results(
    tenant: CurrentTenant,
    store: Store,
) -> list[QuizResult]:
    """List quiz results, most recent first."""
    return await store.get_quiz_results(tenant)
