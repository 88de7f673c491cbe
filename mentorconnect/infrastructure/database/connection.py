# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""PostgreSQL engine and session lifecycle for MentorConnect.

The API lifespan calls ``init_database`` once, and every request then
borrows a session through ``api.dependencies.get_db``. That session spans
the whole request: a service's read, its version-guarded UPDATE and the
re-read of the updated row all run in one transaction, which is committed
when the handler returns and rolled back when it raises.

Failures are split in two. Storage errors (``SQLAlchemyError``) become
``DatabaseError`` and are answered with a generic 500. Lifecycle errors
raised by the services pass through untouched so the API can map their
kind to a status code. In both cases the transaction is rolled back.

Pool sizing comes from the ``DB_`` settings.

Example:
    from mentorconnect.infrastructure.database.connection import get_session
    from mentorconnect.infrastructure.database.repositories import SQLEventRepository

    async with get_session() as session:
        event = await SQLEventRepository(session).find_by_id(event_id)
"""

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

if TYPE_CHECKING:
    from mentorconnect.core.config.settings import Settings

# Set by init_database(), cleared by close_database()
_engine: Optional[AsyncEngine] = None
_sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None

# Seconds before a pooled connection is replaced
_POOL_RECYCLE = 1800


class DatabaseError(Exception):
    """Storage failure, reported to clients as an internal error.

    Distinct from ``LifecycleError``; the API answers it with a 500
    ``internal`` body.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying SQLAlchemy or driver error.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


async def init_database(settings: "Settings") -> None:
    """Create the engine and sessionmaker.

    Creating the engine does not connect; the first request (or the
    readiness check) opens the first pooled connection.

    Args:
        settings: Application settings; ``settings.db`` supplies the URL
            and pool sizes.

    Raises:
        DatabaseError: If the engine cannot be created.
    """
    global _engine, _sessionmaker

    try:
        _engine = create_async_engine(
            settings.db.url,
            pool_size=settings.db.pool_size,
            max_overflow=settings.db.max_overflow,
            pool_pre_ping=True,
            pool_recycle=_POOL_RECYCLE,
            echo=False,
        )

        # Rows stay readable after commit
        _sessionmaker = async_sessionmaker(
            bind=_engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to initialize database connection", e) from e


async def close_database() -> None:
    """Dispose of the pool. Safe to call when nothing was initialized."""
    global _engine, _sessionmaker

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _sessionmaker = None


def get_engine() -> AsyncEngine:
    """Return the shared engine.

    Raises:
        DatabaseError: If ``init_database`` has not run.
    """
    if _engine is None:
        raise DatabaseError("Database not initialized. Call init_database() first.")
    return _engine


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Return the shared sessionmaker.

    Raises:
        DatabaseError: If ``init_database`` has not run.
    """
    if _sessionmaker is None:
        raise DatabaseError("Database not initialized. Call init_database() first.")
    return _sessionmaker


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """Open one transaction for a unit of work.

    Commits when the block exits normally and rolls back otherwise.

    Yields:
        AsyncSession bound to the shared engine.

    Raises:
        DatabaseError: If the database is not initialized or a storage
            operation fails.
    """
    sessionmaker = get_sessionmaker()

    async with sessionmaker() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise DatabaseError("Database operation failed", e) from e
        except Exception:
            await session.rollback()
            raise


async def check_database_connection() -> bool:
    """Run ``SELECT 1`` for the readiness check.

    Returns:
        False when the database is not initialized or unreachable.
    """
    if _engine is None:
        return False

    try:
        async with _engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
