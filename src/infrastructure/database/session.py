"""Database engine and session management."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import settings

POOLER_MARKERS = ("pooler", "pgbouncer")


def connect_args_for(url: str) -> dict[str, Any]:
    """Driver options for a database URL.

    Transaction-mode poolers cannot share asyncpg's prepared statement
    cache, so it is turned off when the URL points at one.
    """
    if any(marker in url for marker in POOLER_MARKERS):
        return {"statement_cache_size": 0}
    return {}


def build_engine(url: str = settings.async_database_url) -> AsyncEngine:
    return create_async_engine(
        url,
        echo=settings.debug,
        pool_pre_ping=True,
        connect_args=connect_args_for(url),
    )


engine = build_engine()

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped session; closed when the request ends."""
    async with async_session_factory() as session:
        yield session
