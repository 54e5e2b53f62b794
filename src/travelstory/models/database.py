"""Async database connection management.

Provides the SQLAlchemy declarative base and a ``Database`` object that owns
the async engine and session factory for one application instance.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class Database:
    """Engine and session factory built from explicit configuration."""

    def __init__(self, database_url: str, **engine_kwargs: Any) -> None:
        """Create the async engine and session factory.

        Args:
            database_url: Async connection URL (postgresql+asyncpg://, sqlite+aiosqlite://)
            **engine_kwargs: Additional arguments passed to create_async_engine
        """
        engine_kwargs.setdefault("echo", False)
        engine_kwargs.setdefault("pool_pre_ping", True)

        self.engine: AsyncEngine = create_async_engine(database_url, **engine_kwargs)
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def create_all(self) -> None:
        """Create all tables registered on ``Base.metadata``."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        """Round-trip a trivial query; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def close(self) -> None:
        """Dispose of pooled connections.

        Should be called during application shutdown.
        """
        await self.engine.dispose()
