"""Async database engine and session factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from gymlog.core.config import get_settings
from gymlog.db.base import Base

settings = get_settings()


def _engine_kwargs() -> dict:
    if settings.uses_sqlite:
        return {"echo": settings.debug}
    return {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "echo": settings.debug,
    }


engine = create_async_engine(settings.async_database_url, **_engine_kwargs())

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields an async DB session (one transaction per request)."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# Same unit of work for embedded callers: `async with session_scope() as db: ...`
session_scope = asynccontextmanager(get_db)


async def init_models(bind: AsyncEngine | None = None) -> None:
    """Create all tables (embedded use and tests; use Alembic in production)."""
    import gymlog.models  # noqa: F401 - register all models

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
