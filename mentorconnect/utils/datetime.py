# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for MentorConnect.

All timestamps are stored in UTC (PostgreSQL TIMESTAMPTZ) and all Python
datetimes are timezone-aware, so naive/aware comparisons never happen
inside the lifecycle services.

Usage:
------
    from mentorconnect.utils.datetime import utc_now

    # For current time
    now = utc_now()

    # For SQLAlchemy model defaults
    created_at = mapped_column(DateTime(timezone=True), default=utc_now)
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware UTC datetime or None.

    Note:
        - If dt is None, returns None
        - If dt is naive, assumes UTC and adds tzinfo
        - If dt is aware, converts to UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume UTC
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def has_passed(moment: datetime, now: datetime | None = None) -> bool:
    """Check whether a moment lies strictly before ``now``.

    Args:
        moment: The datetime to check.
        now: Reference time, defaults to the current UTC time.

    Returns:
        True if ``moment`` is in the past.
    """
    reference = ensure_utc(now) if now is not None else utc_now()
    return ensure_utc(moment) < reference

