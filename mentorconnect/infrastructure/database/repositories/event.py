# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""PostgreSQL repository for events."""

from datetime import datetime
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import array
from sqlalchemy.ext.asyncio import AsyncSession

from mentorconnect.infrastructure.database.models import EventRow
from mentorconnect.infrastructure.database.repositories.base import (
    conditional_update,
    to_columns,
)
from mentorconnect.models.event import Event, EventFilters, EventStatus


class SQLEventRepository:
    """Event persistence backed by the ``events`` table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_by_id(self, event_id: str) -> Event | None:
        result = await self.db.execute(
            select(EventRow)
            .where(EventRow.id == event_id)
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        return Event.model_validate(row) if row else None

    async def insert_one(self, event: Event) -> Event:
        row = EventRow(**to_columns(event.model_dump(exclude_none=True)))
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return Event.model_validate(row)

    async def update_one(
        self,
        event_id: str,
        patch: dict[str, Any],
        expected_version: int | None = None,
    ) -> int:
        return await conditional_update(self.db, EventRow, event_id, patch, expected_version)

    async def delete_one(self, event_id: str) -> int:
        result = await self.db.execute(delete(EventRow).where(EventRow.id == event_id))
        return result.rowcount

    async def find_all(self, filters: EventFilters) -> list[Event]:
        query = select(EventRow).where(EventRow.is_public == filters.is_public)

        if filters.status:
            query = query.where(EventRow.status.in_([s.value for s in filters.status]))
        if filters.category:
            query = query.where(EventRow.category == filters.category)
        if filters.tags:
            query = query.where(EventRow.tags.has_any(array(filters.tags)))
        if filters.start_date:
            query = query.where(EventRow.start_date >= filters.start_date)
        if filters.end_date:
            query = query.where(EventRow.end_date <= filters.end_date)

        query = query.order_by(EventRow.start_date.asc()).offset(filters.skip).limit(filters.limit)
        return await self._fetch(query)

    async def find_upcoming(self, limit: int, now: datetime) -> list[Event]:
        query = (
            select(EventRow)
            .where(
                EventRow.start_date > now,
                EventRow.is_public.is_(True),
                EventRow.status == EventStatus.UPCOMING.value,
            )
            .order_by(EventRow.start_date.asc())
            .limit(limit)
        )
        return await self._fetch(query)

    async def find_by_attendee(self, user_id: str) -> list[Event]:
        query = (
            select(EventRow)
            .where(EventRow.attendees.contains([{"user_id": user_id}]))
            .order_by(EventRow.start_date.asc())
        )
        return await self._fetch(query)

    async def find_by_organizer(self, organizer_id: str) -> list[Event]:
        query = (
            select(EventRow)
            .where(EventRow.organizer_id == organizer_id)
            .order_by(EventRow.start_date.asc())
        )
        return await self._fetch(query)

    async def _fetch(self, query) -> list[Event]:
        result = await self.db.execute(query.execution_options(populate_existing=True))
        return [Event.model_validate(row) for row in result.scalars().all()]
