"""Database engine and session maker."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from banksync_config.settings import get_settings


@lru_cache(maxsize=1)
def get_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    The engine manages the connection pool and is reused for all syncs of
    one process.

    Parameters
    ----------
    database_url
        Override for the configured PostgreSQL URL

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        database_url or get_settings().database_url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Domain entities are read back after commits, so keep loaded state
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the shared async session maker (singleton)."""
    return create_session_maker(get_engine())
