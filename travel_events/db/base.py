# travel_events/db/base.py

from __future__ import annotations

import contextlib
import logging
from typing import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from travel_events.config import settings

log = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _build_engine(url: str) -> AsyncEngine:
    if url.startswith("sqlite+aiosqlite://"):
        # One connection per checkout; nothing is shared between event loops.
        log.info("Using SQLite database (aiosqlite): %s", url)
        return create_async_engine(url, echo=settings.DB_ECHO, poolclass=NullPool)

    if not url.startswith("postgresql+asyncpg://"):
        log.warning("DATABASE_URL uses an unsupported driver: %s", url.split("://", 1)[0])
        raise ValueError("DATABASE_URL must use the 'asyncpg' or 'aiosqlite' driver for async operations.")

    log.info("Using ASYNC PostgreSQL database (pool_size=%d)", settings.DB_POOL_SIZE)
    return create_async_engine(
        url,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
    )


engine: AsyncEngine = _build_engine(settings.DATABASE_URL)
async_session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def get_async_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency: creates and yields an async session, handling commit/rollback.
    """
    session = async_session_factory()
    log.debug("Session %s created, yielding...", id(session))
    try:
        yield session
        await session.commit()
        log.debug("Session %s committed.", id(session))
    except SQLAlchemyError:
        log.exception("SQLAlchemyError in session %s, rolling back...", id(session))
        await session.rollback()
        raise
    except Exception:
        log.debug("Exception in session %s scope, rolling back...", id(session))
        await session.rollback()
        raise
    finally:
        await session.close()


@contextlib.asynccontextmanager
async def async_session_context() -> AsyncGenerator[AsyncSession, None]:
    session: AsyncSession = async_session_factory()
    log.debug("Entering async session context %s", id(session))
    try:
        yield session
        await session.commit()
    except Exception:
        log.exception("Rolling back session %s from context due to exception", id(session))
        await session.rollback()
        raise
    finally:
        await session.close()


async def create_db_and_tables() -> None:
    """Create every table registered on ``Base.metadata`` (dev and tests; deployments use Alembic)."""
    import travel_events.core.events.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("Database tables created.")


async def drop_db_and_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    log.info("Database tables dropped.")


__all__ = [
    "Base", "engine", "async_session_factory", "AsyncSession",
    "get_async_db_session", "async_session_context",
    "create_db_and_tables", "drop_db_and_tables",
]
