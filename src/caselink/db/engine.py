"""Async SQLAlchemy engine and session creation."""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from caselink.config import settings


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.endswith(":///"))


def create_db_engine(url: str | None = None) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    In-memory SQLite shares a single connection so every session sees the
    same database for the life of the process.
    """
    db_url = url or settings.database_url
    engine_kwargs: dict = {"echo": False}

    if _is_memory_sqlite(db_url):
        engine_kwargs.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
    elif not db_url.startswith("sqlite"):
        engine_kwargs.update(pool_size=10, max_overflow=20)

    return create_async_engine(db_url, **engine_kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create every registered table (no migrations; storage is process-local)."""
    from caselink.db.base import Base
    import caselink.db.models  # noqa: F401  register all ORM models

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
