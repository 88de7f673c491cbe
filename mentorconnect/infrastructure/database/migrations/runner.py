# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database migration runner.

Applies the revisions under ``migrations/versions`` programmatically with
alembic operations, without the alembic CLI or an ``alembic.ini``.

Example:
    from mentorconnect.infrastructure.database.migrations.runner import run_migrations

    applied = await run_migrations(settings.db.url)
"""

import importlib
import logging
from typing import Any, Callable

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

logger = logging.getLogger(__name__)

# Revisions in order (must be maintained manually)
MIGRATIONS = [
    "001_initial_schema",
]

_VERSIONS_PACKAGE = "mentorconnect.infrastructure.database.migrations.versions"


async def run_migrations(
    db_url: str,
    target_revision: str | None = None,
) -> list[str]:
    """Run pending migrations.

    Args:
        db_url: Database connection URL (asyncpg format).
        target_revision: Optional revision to stop at. If None, applies
            everything pending.

    Returns:
        List of applied revision IDs.
    """
    engine = create_async_engine(db_url, echo=False)

    try:
        await _ensure_version_table(engine)

        current_version = await _get_current_version(engine)
        logger.info("Current migration version: %s", current_version or "None")

        pending = get_pending_migrations(current_version, target_revision)
        if not pending:
            logger.info("No pending migrations")
            return []

        logger.info("Applying %d migrations: %s", len(pending), ", ".join(pending))

        applied = []
        for revision in pending:
            await _apply_migration(engine, revision)
            applied.append(revision)
            logger.info("Applied migration: %s", revision)

        return applied

    finally:
        await engine.dispose()


async def get_migration_status(db_url: str) -> dict[str, Any]:
    """Report the current and pending revisions of a database."""
    engine = create_async_engine(db_url, echo=False)

    try:
        await _ensure_version_table(engine)
        current_version = await _get_current_version(engine)
        pending = get_pending_migrations(current_version)

        return {
            "current_version": current_version,
            "latest_version": MIGRATIONS[-1] if MIGRATIONS else None,
            "pending_migrations": pending,
            "is_up_to_date": not pending,
        }
    finally:
        await engine.dispose()


def get_pending_migrations(
    current_version: str | None,
    target_revision: str | None = None,
) -> list[str]:
    """Get the revisions to apply, in order.

    Args:
        current_version: Revision recorded in ``alembic_version``.
        target_revision: Last revision to include.

    Returns:
        Revision IDs after ``current_version`` up to ``target_revision``.
        Empty when either revision is unknown.
    """
    if current_version is None:
        start_idx = 0
    elif current_version in MIGRATIONS:
        start_idx = MIGRATIONS.index(current_version) + 1
    else:
        logger.warning("Current version %s not in known migrations list", current_version)
        return []

    if target_revision is None:
        end_idx = len(MIGRATIONS)
    elif target_revision in MIGRATIONS:
        end_idx = MIGRATIONS.index(target_revision) + 1
    else:
        logger.warning("Target revision %s not found", target_revision)
        return []

    return MIGRATIONS[start_idx:end_idx]


async def _ensure_version_table(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.execute(
            text("""
                CREATE TABLE IF NOT EXISTS alembic_version (
                    version_num VARCHAR(128) NOT NULL,
                    CONSTRAINT alembic_version_pkc PRIMARY KEY (version_num)
                )
            """)
        )


async def _get_current_version(engine: AsyncEngine) -> str | None:
    async with engine.connect() as conn:
        result = await conn.execute(text("SELECT version_num FROM alembic_version LIMIT 1"))
        row = result.fetchone()
        return row[0] if row else None


async def _apply_migration(engine: AsyncEngine, revision: str) -> None:
    """Apply one revision and record it in ``alembic_version``.

    Raises:
        ImportError: If the revision module cannot be imported.
        ValueError: If it defines no ``upgrade()``.
    """
    try:
        module = importlib.import_module(f"{_VERSIONS_PACKAGE}.{revision}")
    except ImportError as e:
        raise ImportError(f"Cannot import migration {revision}: {e}") from e

    upgrade_fn: Callable | None = getattr(module, "upgrade", None)
    if upgrade_fn is None:
        raise ValueError(f"Migration {revision} has no upgrade() function")

    async with engine.begin() as conn:
        await conn.run_sync(_run_upgrade_sync, upgrade_fn)

        await conn.execute(text("DELETE FROM alembic_version"))
        await conn.execute(
            text("INSERT INTO alembic_version (version_num) VALUES (:version)"),
            {"version": revision},
        )


def _run_upgrade_sync(connection, upgrade_fn: Callable) -> None:
    """Run an upgrade function with alembic operations bound to the connection."""
    from alembic.operations import Operations
    from alembic.runtime.migration import MigrationContext

    context = MigrationContext.configure(connection)

    with context.begin_transaction():
        with Operations.context(context):
            upgrade_fn()
