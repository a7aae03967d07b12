from __future__ import annotations

from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from settings.config import settings
import auth.tables  # noqa: F401  registers the users table on the shared metadata

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def database_url() -> str:
    # pgbouncer wins when both are configured
    return settings.PGBOUNCER_DSN or settings.POSTGRES_DSN


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        _engine = create_async_engine(database_url(), pool_size=10, max_overflow=20, pool_pre_ping=True)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Sessions keep attribute values after commit so services can build
    response models from the rows they just saved.
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _session_factory


async def get_async_session() -> AsyncIterator[AsyncSession]:
    """
    One session per request. Services own the commit; whatever a failed
    request leaves pending is discarded when the session closes.
    """
    async with get_session_factory()() as session:
        yield session


async def init_postgres() -> None:
    """Create the engine at startup and fail fast if the database is unreachable."""
    async with get_engine().connect() as conn:
        await conn.execute(text("SELECT 1"))


async def close_postgres() -> None:
    """Release pooled connections; the next use builds a fresh engine."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
