# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared helpers for SQLAlchemy repositories."""

from enum import Enum
from typing import Any

from pydantic import BaseModel
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession


def to_column_value(value: Any) -> Any:
    """Convert a domain value into something a column can store.

    Enums become their value, pydantic models (and lists of them) become
    JSON-compatible dicts.
    """
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [to_column_value(item) for item in value]
    return value


def to_columns(data: dict[str, Any]) -> dict[str, Any]:
    """Convert every value of a patch or entity dump."""
    return {key: to_column_value(value) for key, value in data.items()}


async def conditional_update(
    db: AsyncSession,
    row_cls: Any,
    row_id: str,
    patch: dict[str, Any],
    expected_version: int | None,
) -> int:
    """Run a single-row UPDATE that bumps ``version``.

    Args:
        db: Database session.
        row_cls: ORM class with ``id`` and ``version`` columns.
        row_id: Primary key of the row.
        patch: Column values to set.
        expected_version: When given, the row is only updated if its
            stored version still matches.

    Returns:
        Number of rows modified (0 or 1).
    """
    values = to_columns(patch)
    values.pop("version", None)
    values.pop("id", None)

    stmt = update(row_cls).where(row_cls.id == row_id)
    if expected_version is not None:
        stmt = stmt.where(row_cls.version == expected_version)
    stmt = stmt.values(**values, version=row_cls.version + 1).execution_options(
        synchronize_session=False
    )

    result = await db.execute(stmt)
    return result.rowcount
