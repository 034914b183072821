"""Database session management."""

import ssl
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from studydesk.config import get_settings

settings = get_settings()


def build_engine(url: str, *, echo: bool = False, requires_ssl: bool = False) -> AsyncEngine:
    """Create an async engine with pool options suited to the backend."""
    if url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url:
            # One shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
        return create_async_engine(url, echo=echo, **kwargs)

    connect_args: dict[str, Any] = {}
    if requires_ssl:
        connect_args["ssl"] = ssl.create_default_context()
    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        connect_args=connect_args,
    )


# Create async engine
engine = build_engine(
    settings.database_url,
    echo=settings.debug,
    requires_ssl=settings.database_requires_ssl,
)

# Session factory
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

