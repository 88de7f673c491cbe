# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Repository interfaces consumed by the lifecycle services.

Services receive these through their constructors. The PostgreSQL
implementations live in ``mentorconnect.infrastructure.database.repositories``;
tests pass in-memory doubles.

Write semantics:
    ``update_one(entity_id, patch, expected_version)`` applies ``patch`` as a
    single-row write and returns the number of modified rows. When
    ``expected_version`` is given the write only lands if the stored version
    still equals it. Every successful write increments ``version``.
"""

from datetime import datetime
from typing import Any, Protocol

from mentorconnect.models.event import Event, EventFilters
from mentorconnect.models.mentorship import Mentorship, MentorshipStatus
from mentorconnect.models.user import ProfileRecord, UserRecord


class DuplicateRecordError(Exception):
    """Raised by a repository when a uniqueness constraint rejects an insert."""

    pass


class UserRepository(Protocol):
    """Read access to user identities."""

    async def find_user_by_id(self, user_id: str) -> UserRecord | None: ...


class ProfileRepository(Protocol):
    """Access to user profiles."""

    async def find_profile_by_user_id(self, user_id: str) -> ProfileRecord | None: ...

    async def set_mentorship_availability(
        self,
        user_id: str,
        available: bool,
    ) -> ProfileRecord: ...


class MentorshipRepository(Protocol):
    """Persistence for mentorships."""

    async def find_by_id(self, mentorship_id: str) -> Mentorship | None: ...

    async def insert_one(self, mentorship: Mentorship) -> Mentorship: ...

    async def update_one(
        self,
        mentorship_id: str,
        patch: dict[str, Any],
        expected_version: int | None = None,
    ) -> int: ...

    async def find_open_between(
        self,
        mentor_id: str,
        mentee_id: str,
    ) -> list[Mentorship]: ...

    async def find_by_mentor(
        self,
        mentor_id: str,
        status: MentorshipStatus | None = None,
    ) -> list[Mentorship]: ...

    async def find_by_mentee(
        self,
        mentee_id: str,
        status: MentorshipStatus | None = None,
    ) -> list[Mentorship]: ...


class EventRepository(Protocol):
    """Persistence for events and their attendee lists."""

    async def find_by_id(self, event_id: str) -> Event | None: ...

    async def insert_one(self, event: Event) -> Event: ...

    async def update_one(
        self,
        event_id: str,
        patch: dict[str, Any],
        expected_version: int | None = None,
    ) -> int: ...

    async def delete_one(self, event_id: str) -> int: ...

    async def find_all(self, filters: EventFilters) -> list[Event]: ...

    async def find_upcoming(self, limit: int, now: datetime) -> list[Event]: ...

    async def find_by_attendee(self, user_id: str) -> list[Event]: ...

    async def find_by_organizer(self, organizer_id: str) -> list[Event]: ...
