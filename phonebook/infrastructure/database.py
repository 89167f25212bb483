"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions surface as StorageError (core/errors.py)
    - IntegrityError → CONFLICT, DataError (value rejected by a column type) → VALIDATION,
      everything else → UNAVAILABLE
    - StorageError raised inside the session block passes through unchanged

Design Decisions:
    - One manager per PersonStore, created by the application factory and disposed
      in the lifespan (no module-level engine)
    - Pool sizing only applied to server databases; SQLite uses SQLAlchemy's default pool
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from phonebook.core.errors import StorageError, StorageErrorKind
from phonebook.db.base import Base

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def safe_url(self) -> str:
        """Database URL with the password masked, for logging."""
        return self.engine.url.render_as_string(hide_password=True)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback and StorageError classification."""
        session = self._session_factory()
        try:
            yield session
        except StorageError:
            await session.rollback()
            raise
        except IntegrityError as e:
            await session.rollback()
            logger.warning(f"DB integrity error: {e.orig}")
            raise StorageError(
                StorageErrorKind.CONFLICT, "Integrity constraint violated",
            ) from e
        except DataError as e:
            await session.rollback()
            logger.warning(f"DB data error: {e.orig}")
            raise StorageError(
                StorageErrorKind.VALIDATION,
                f"Person validation failed: {e.orig}",
            ) from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise StorageError(
                StorageErrorKind.UNAVAILABLE, "Database operation failed",
            ) from e
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create all tables known to Base.metadata (tests and local runs)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
