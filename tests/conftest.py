"""Pytest configuration and fixtures."""

import os

# Settings are read at import time; configure before importing the app
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL_OVERRIDE"] = "sqlite+aiosqlite:///:memory:"

from collections.abc import AsyncGenerator, Callable  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from studydesk.api.deps import create_access_token, get_study_store  # noqa: E402
from studydesk.clock import NS_PER_DAY, NS_PER_SECOND  # noqa: E402
from studydesk.db.base import Base  # noqa: E402
from studydesk.db.session import build_engine  # noqa: E402
from studydesk.main import app  # noqa: E402
from studydesk.services import StudyStore  # noqa: E402
from studydesk.store import CollectionStore  # noqa: E402

# 09:00 UTC on epoch day 20000
START_NS = 20_000 * NS_PER_DAY + 9 * 3600 * NS_PER_SECOND


class FakeClock:
    """Clock that only moves when a test tells it to."""

    def __init__(self, start_ns: int = START_NS) -> None:
        self.now = start_ns

    def now_ns(self) -> int:
        return self.now

    def advance(self, *, days: int = 0, seconds: int = 0) -> None:
        self.now += days * NS_PER_DAY + seconds * NS_PER_SECOND


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh in-memory SQLite database for each test."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def collection_store(session_factory: async_sessionmaker[AsyncSession], clock: FakeClock) -> CollectionStore:
    return CollectionStore(session_factory, clock)


@pytest.fixture
def store(collection_store: CollectionStore, clock: FakeClock) -> StudyStore:
    return StudyStore(collection_store, clock)


@pytest.fixture
async def client(store: StudyStore) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints against the test store."""
    app.dependency_overrides[get_study_store] = lambda: store
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Build an Authorization header for a given identity subject."""

    def _headers(subject: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(subject)}"}

    return _headers


@pytest.fixture
def alice(auth_headers: Callable[[str], dict[str, str]]) -> dict[str, str]:
    return auth_headers("alice")


@pytest.fixture
def bob(auth_headers: Callable[[str], dict[str, str]]) -> dict[str, str]:
    return auth_headers("bob")
