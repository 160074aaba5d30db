"""Database Session Manager — the long-lived preference-store handle.

Invariants:
    - Constructed once at startup, connect() verified before serving traffic
    - session() raises StoreUnavailableError until connect() has succeeded
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions and driver-level OSErrors (connection refused
      or dropped after startup) mapped to StoreUnavailableError (core/errors.py)
    - health_check() never raises; any failure reads as not ready

Design Decisions:
    - Handle lives on app.state and is injected per request, not a module global
    - expire_on_commit=False: ORM rows stay readable after commit in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from racing_dashboard.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(self, database_url: str, **engine_kwargs):
        self.engine = create_async_engine(
            database_url, pool_pre_ping=True, **engine_kwargs,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._connected = False

    @classmethod
    def from_settings(cls, database_url: str, pool_size: int, max_overflow: int):
        """Build a manager; pool sizing only applies to server databases."""
        if database_url.startswith("sqlite"):
            return cls(database_url)
        return cls(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_recycle=3600,
        )

    @property
    def connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        """Open and verify the pool. Raises StoreUnavailableError on failure."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Preference store connection failed: {e}")
            raise StoreUnavailableError("connect") from e
        self._connected = True
        logger.info("Connected to preference store")

    async def disconnect(self) -> None:
        self._connected = False
        await self.engine.dispose()
        logger.info("Disconnected from preference store")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        if not self._connected:
            raise StoreUnavailableError("session")
        session = self._session_factory()
        try:
            yield session
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise StoreUnavailableError("execute") from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise StoreUnavailableError("query") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise StoreUnavailableError("unknown") from e
        except OSError as e:
            await session.rollback()
            logger.error(f"DB connection lost: {e}")
            raise StoreUnavailableError("connect") from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        if not self._connected:
            return False
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False
