# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""In-memory repository doubles for service and API tests.

They follow the same write contract as the PostgreSQL repositories:
``update_one`` is a single conditional write that bumps ``version`` and
returns the number of modified rows.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from mentorconnect.domains.repositories import DuplicateRecordError
from mentorconnect.models.event import Event, EventFilters, EventStatus
from mentorconnect.models.mentorship import OPEN_STATUSES, Mentorship, MentorshipStatus
from mentorconnect.models.user import Availability, ProfileRecord, UserRecord
from mentorconnect.utils.datetime import ensure_utc

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)

MENTOR_ID = "user-mentor"
MENTEE_ID = "user-mentee"
ADMIN_ID = "user-admin"
OUTSIDER_ID = "user-outsider"


class FrozenClock:
    """Callable clock pinned to a moment that tests can move forward."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class _VersionedStore:
    """Dict-backed storage shared by the mentorship and event fakes."""

    model: type

    def __init__(self) -> None:
        self.items: dict[str, Any] = {}
        self.update_calls = 0
        # Runs once right before the next update, to interleave another writer
        self.before_next_update: Callable[[], None] | None = None

    async def find_by_id(self, entity_id: str):
        item = self.items.get(entity_id)
        return item.model_copy(deep=True) if item else None

    async def update_one(
        self,
        entity_id: str,
        patch: dict[str, Any],
        expected_version: int | None = None,
    ) -> int:
        self.update_calls += 1
        if self.before_next_update is not None:
            hook, self.before_next_update = self.before_next_update, None
            hook()

        current = self.items.get(entity_id)
        if current is None:
            return 0
        if expected_version is not None and current.version != expected_version:
            return 0

        data = {**current.model_dump(), **patch, "version": current.version + 1}
        self.items[entity_id] = self.model.model_validate(data)
        return 1

    def bump_version(self, entity_id: str) -> None:
        """Simulate a write by another request."""
        current = self.items[entity_id]
        self.items[entity_id] = current.model_copy(update={"version": current.version + 1})


class InMemoryUserRepository:
    def __init__(self, users: list[UserRecord] | None = None) -> None:
        self.users = {user.id: user for user in users or []}

    def add(self, user: UserRecord) -> UserRecord:
        self.users[user.id] = user
        return user

    async def find_user_by_id(self, user_id: str) -> UserRecord | None:
        return self.users.get(user_id)


class InMemoryProfileRepository:
    def __init__(self) -> None:
        self.profiles: dict[str, ProfileRecord] = {}

    def add(self, user_id: str, mentorship_available: bool) -> ProfileRecord:
        profile = ProfileRecord(
            user_id=user_id,
            availability=Availability(mentorship_available=mentorship_available),
        )
        self.profiles[user_id] = profile
        return profile

    async def find_profile_by_user_id(self, user_id: str) -> ProfileRecord | None:
        return self.profiles.get(user_id)

    async def set_mentorship_availability(
        self,
        user_id: str,
        available: bool,
    ) -> ProfileRecord:
        return self.add(user_id, available)


class InMemoryMentorshipRepository(_VersionedStore):
    model = Mentorship

    async def insert_one(self, mentorship: Mentorship) -> Mentorship:
        # Mirrors the partial unique index on open pairs
        if mentorship.status in OPEN_STATUSES and any(
            m.mentor_id == mentorship.mentor_id
            and m.mentee_id == mentorship.mentee_id
            and m.status in OPEN_STATUSES
            for m in self.items.values()
        ):
            raise DuplicateRecordError("uq_mentorships_open_pair")

        self.items[mentorship.id] = mentorship.model_copy(deep=True)
        return mentorship.model_copy(deep=True)

    async def find_open_between(self, mentor_id: str, mentee_id: str) -> list[Mentorship]:
        return [
            m.model_copy(deep=True)
            for m in self.items.values()
            if m.mentor_id == mentor_id
            and m.mentee_id == mentee_id
            and m.status in OPEN_STATUSES
        ]

    async def find_by_mentor(
        self,
        mentor_id: str,
        status: MentorshipStatus | None = None,
    ) -> list[Mentorship]:
        return self._select(lambda m: m.mentor_id == mentor_id, status)

    async def find_by_mentee(
        self,
        mentee_id: str,
        status: MentorshipStatus | None = None,
    ) -> list[Mentorship]:
        return self._select(lambda m: m.mentee_id == mentee_id, status)

    def _select(self, predicate, status) -> list[Mentorship]:
        found = [
            m.model_copy(deep=True)
            for m in self.items.values()
            if predicate(m) and (status is None or m.status == status)
        ]
        return sorted(found, key=lambda m: m.created_at, reverse=True)


class InMemoryEventRepository(_VersionedStore):
    model = Event

    async def insert_one(self, event: Event) -> Event:
        self.items[event.id] = event.model_copy(deep=True)
        return event.model_copy(deep=True)

    async def delete_one(self, event_id: str) -> int:
        return 1 if self.items.pop(event_id, None) is not None else 0

    async def find_all(self, filters: EventFilters) -> list[Event]:
        def matches(event: Event) -> bool:
            if event.is_public != filters.is_public:
                return False
            if filters.status and event.status not in filters.status:
                return False
            if filters.category and event.category != filters.category:
                return False
            if filters.tags and not set(filters.tags) & set(event.tags):
                return False
            if filters.start_date and ensure_utc(event.start_date) < ensure_utc(filters.start_date):
                return False
            if filters.end_date and ensure_utc(event.end_date) > ensure_utc(filters.end_date):
                return False
            return True

        found = self._sorted(e for e in self.items.values() if matches(e))
        return found[filters.skip:filters.skip + filters.limit]

    async def find_upcoming(self, limit: int, now: datetime) -> list[Event]:
        found = self._sorted(
            e
            for e in self.items.values()
            if ensure_utc(e.start_date) > ensure_utc(now)
            and e.is_public
            and e.status == EventStatus.UPCOMING
        )
        return found[:limit]

    async def find_by_attendee(self, user_id: str) -> list[Event]:
        return self._sorted(
            e for e in self.items.values() if any(a.user_id == user_id for a in e.attendees)
        )

    async def find_by_organizer(self, organizer_id: str) -> list[Event]:
        return self._sorted(e for e in self.items.values() if e.organizer_id == organizer_id)

    @staticmethod
    def _sorted(events) -> list[Event]:
        return [
            e.model_copy(deep=True)
            for e in sorted(events, key=lambda e: ensure_utc(e.start_date))
        ]
