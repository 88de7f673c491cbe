# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""PostgreSQL repositories for users, profiles and mentorships."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mentorconnect.domains.repositories import DuplicateRecordError
from mentorconnect.infrastructure.database.models import MentorshipRow, ProfileRow, UserRow
from mentorconnect.infrastructure.database.repositories.base import (
    conditional_update,
    to_columns,
)
from mentorconnect.models.mentorship import OPEN_STATUSES, Mentorship, MentorshipStatus
from mentorconnect.models.user import Availability, ProfileRecord, UserRecord

logger = logging.getLogger(__name__)

_OPEN_PAIR_INDEX = "uq_mentorships_open_pair"


class SQLUserRepository:
    """User lookups backed by the ``users`` table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_user_by_id(self, user_id: str) -> UserRecord | None:
        result = await self.db.execute(select(UserRow).where(UserRow.id == user_id))
        row = result.scalar_one_or_none()
        return UserRecord.model_validate(row) if row else None


class SQLProfileRepository:
    """Profile access backed by the ``profiles`` table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_profile_by_user_id(self, user_id: str) -> ProfileRecord | None:
        row = await self._get_row(user_id)
        return self._to_record(row) if row else None

    async def set_mentorship_availability(
        self,
        user_id: str,
        available: bool,
    ) -> ProfileRecord:
        """Set the availability flag, creating the profile if missing."""
        row = await self._get_row(user_id)
        if row is None:
            row = ProfileRow(user_id=user_id, mentorship_available=available)
            self.db.add(row)
        else:
            row.mentorship_available = available

        await self.db.flush()
        return self._to_record(row)

    async def _get_row(self, user_id: str) -> ProfileRow | None:
        result = await self.db.execute(select(ProfileRow).where(ProfileRow.user_id == user_id))
        return result.scalar_one_or_none()

    @staticmethod
    def _to_record(row: ProfileRow) -> ProfileRecord:
        return ProfileRecord(
            user_id=row.user_id,
            availability=Availability(mentorship_available=row.mentorship_available),
        )


class SQLMentorshipRepository:
    """Mentorship persistence backed by the ``mentorships`` table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_by_id(self, mentorship_id: str) -> Mentorship | None:
        result = await self.db.execute(
            select(MentorshipRow)
            .where(MentorshipRow.id == mentorship_id)
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        return Mentorship.model_validate(row) if row else None

    async def insert_one(self, mentorship: Mentorship) -> Mentorship:
        """Insert a mentorship.

        Raises:
            DuplicateRecordError: If the open-pair unique index rejects it.
        """
        row = MentorshipRow(**to_columns(mentorship.model_dump(exclude_none=True)))
        self.db.add(row)

        try:
            await self.db.flush()
        except IntegrityError as e:
            if _OPEN_PAIR_INDEX in str(e.orig):
                logger.info(
                    "Open mentorship insert rejected by index: mentor=%s, mentee=%s",
                    mentorship.mentor_id,
                    mentorship.mentee_id,
                )
                raise DuplicateRecordError(_OPEN_PAIR_INDEX) from e
            raise

        await self.db.refresh(row)
        return Mentorship.model_validate(row)

    async def update_one(
        self,
        mentorship_id: str,
        patch: dict[str, Any],
        expected_version: int | None = None,
    ) -> int:
        return await conditional_update(
            self.db, MentorshipRow, mentorship_id, patch, expected_version
        )

    async def find_open_between(self, mentor_id: str, mentee_id: str) -> list[Mentorship]:
        query = select(MentorshipRow).where(
            MentorshipRow.mentor_id == mentor_id,
            MentorshipRow.mentee_id == mentee_id,
            MentorshipRow.status.in_([s.value for s in OPEN_STATUSES]),
        )
        return await self._fetch(query)

    async def find_by_mentor(
        self,
        mentor_id: str,
        status: MentorshipStatus | None = None,
    ) -> list[Mentorship]:
        query = select(MentorshipRow).where(MentorshipRow.mentor_id == mentor_id)
        if status:
            query = query.where(MentorshipRow.status == MentorshipStatus(status).value)
        return await self._fetch(query.order_by(MentorshipRow.created_at.desc()))

    async def find_by_mentee(
        self,
        mentee_id: str,
        status: MentorshipStatus | None = None,
    ) -> list[Mentorship]:
        query = select(MentorshipRow).where(MentorshipRow.mentee_id == mentee_id)
        if status:
            query = query.where(MentorshipRow.status == MentorshipStatus(status).value)
        return await self._fetch(query.order_by(MentorshipRow.created_at.desc()))

    async def _fetch(self, query) -> list[Mentorship]:
        result = await self.db.execute(query.execution_options(populate_existing=True))
        return [Mentorship.model_validate(row) for row in result.scalars().all()]
