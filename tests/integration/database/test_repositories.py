# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the PostgreSQL repositories.

Requires PostgreSQL to be running.
"""

import asyncio
import os
from datetime import timedelta

import pytest

from mentorconnect.domains.event import EventService
from mentorconnect.domains.mentorship import MentorshipService
from mentorconnect.domains.repositories import DuplicateRecordError
from mentorconnect.infrastructure.database.repositories import (
    SQLEventRepository,
    SQLMentorshipRepository,
    SQLProfileRepository,
    SQLUserRepository,
)
from mentorconnect.models.event import (
    AttendeeStatus,
    CreateEventRequest,
    EventFilters,
    EventStatus,
)
from mentorconnect.models.mentorship import Mentorship, MentorshipStatus
from mentorconnect.utils.datetime import utc_now
from tests.fakes import MENTEE_ID, MENTOR_ID, OUTSIDER_ID

pytestmark = pytest.mark.skipif(
    not os.environ.get("TEST_DATABASE_URL"),
    reason="TEST_DATABASE_URL not set",
)


def mentorship_service(session) -> MentorshipService:
    return MentorshipService(
        SQLMentorshipRepository(session),
        SQLUserRepository(session),
        SQLProfileRepository(session),
    )


def event_request(**overrides) -> CreateEventRequest:
    start = utc_now() + timedelta(days=3)
    data = {
        "title": "Resume workshop",
        "description": "Bring a printed resume",
        "start_date": start,
        "end_date": start + timedelta(hours=2),
        "tags": ["careers"],
    }
    data.update(overrides)
    return CreateEventRequest(**data)


class TestMentorshipRepository:
    """Tests for SQLMentorshipRepository."""

    @pytest.mark.asyncio
    async def test_request_round_trip(self, db_session):
        service = mentorship_service(db_session)

        created = await service.request_mentorship(MENTEE_ID, MENTOR_ID)
        loaded = await SQLMentorshipRepository(db_session).find_by_id(created.id)

        assert loaded is not None
        assert loaded.status == MentorshipStatus.PENDING
        assert loaded.version == 1
        assert loaded.created_at is not None

    @pytest.mark.asyncio
    async def test_stale_version_updates_nothing(self, db_session):
        repo = SQLMentorshipRepository(db_session)
        created = await mentorship_service(db_session).request_mentorship(MENTEE_ID, MENTOR_ID)

        assert await repo.update_one(created.id, {"status": MentorshipStatus.ACTIVE}, 1) == 1
        assert await repo.update_one(created.id, {"status": MentorshipStatus.CANCELED}, 1) == 0

        reloaded = await repo.find_by_id(created.id)
        assert reloaded.status == MentorshipStatus.ACTIVE
        assert reloaded.version == 2

    @pytest.mark.asyncio
    async def test_open_pair_index_rejects_second_insert(self, db_session):
        repo = SQLMentorshipRepository(db_session)
        now = utc_now()
        await repo.insert_one(
            Mentorship(id="m-1", mentor_id=MENTOR_ID, mentee_id=MENTEE_ID, created_at=now, updated_at=now)
        )

        with pytest.raises(DuplicateRecordError):
            await repo.insert_one(
                Mentorship(id="m-2", mentor_id=MENTOR_ID, mentee_id=MENTEE_ID, created_at=now, updated_at=now)
            )

    @pytest.mark.asyncio
    async def test_closed_mentorship_frees_the_pair(self, db_session):
        service = mentorship_service(db_session)
        first = await service.request_mentorship(MENTEE_ID, MENTOR_ID)
        await service.update_status(first.id, MENTEE_ID, MentorshipStatus.CANCELED)

        second = await service.request_mentorship(MENTEE_ID, MENTOR_ID)

        listed = await service.list_as_mentor(MENTOR_ID)
        assert {m.id for m in listed} == {first.id, second.id}

    @pytest.mark.asyncio
    async def test_concurrent_requests_create_one_mentorship(self, session_factory):
        async def request():
            async with session_factory() as session:
                try:
                    await mentorship_service(session).request_mentorship(MENTEE_ID, MENTOR_ID)
                    await session.commit()
                    return True
                except Exception:
                    await session.rollback()
                    return False

        results = await asyncio.gather(request(), request())

        async with session_factory() as session:
            mentorships = await SQLMentorshipRepository(session).find_by_mentee(MENTEE_ID)
        assert sorted(results) == [False, True]
        assert len(mentorships) == 1

    @pytest.mark.asyncio
    async def test_availability_creates_missing_profile(self, db_session):
        profiles = SQLProfileRepository(db_session)

        await profiles.set_mentorship_availability(OUTSIDER_ID, True)
        profile = await profiles.find_profile_by_user_id(OUTSIDER_ID)

        assert profile.availability.mentorship_available is True


class TestEventRepository:
    """Tests for SQLEventRepository."""

    @pytest.mark.asyncio
    async def test_registration_round_trip(self, db_session):
        service = EventService(SQLEventRepository(db_session))
        event = await service.create_event(MENTOR_ID, event_request(capacity=1))

        await service.register(event.id, MENTEE_ID)
        updated = await service.register(event.id, OUTSIDER_ID)

        assert [a.status for a in updated.attendees] == [
            AttendeeStatus.REGISTERED,
            AttendeeStatus.WAITLISTED,
        ]
        assert updated.version == 3

    @pytest.mark.asyncio
    async def test_find_by_attendee_uses_json_containment(self, db_session):
        service = EventService(SQLEventRepository(db_session))
        joined = await service.create_event(MENTOR_ID, event_request(title="Joined"))
        await service.create_event(MENTOR_ID, event_request(title="Skipped"))
        await service.register(joined.id, MENTEE_ID)

        events = await SQLEventRepository(db_session).find_by_attendee(MENTEE_ID)

        assert [e.title for e in events] == ["Joined"]

    @pytest.mark.asyncio
    async def test_find_all_filters(self, db_session):
        repo = SQLEventRepository(db_session)
        service = EventService(repo)
        await service.create_event(MENTOR_ID, event_request(title="Careers", tags=["careers"]))
        await service.create_event(MENTOR_ID, event_request(title="Social", tags=["social"]))
        await service.create_event(MENTOR_ID, event_request(title="Private", is_public=False))

        by_tag = await repo.find_all(EventFilters(tags=["social", "sports"]))
        by_status = await repo.find_all(EventFilters(status=[EventStatus.UPCOMING]))
        private = await repo.find_all(EventFilters(is_public=False))

        assert [e.title for e in by_tag] == ["Social"]
        assert {e.title for e in by_status} == {"Careers", "Social"}
        assert [e.title for e in private] == ["Private"]

    @pytest.mark.asyncio
    async def test_delete_reports_rowcount(self, db_session):
        repo = SQLEventRepository(db_session)
        event = await EventService(repo).create_event(MENTOR_ID, event_request())

        assert await repo.delete_one(event.id) == 1
        assert await repo.delete_one(event.id) == 0
        assert await repo.find_by_id(event.id) is None
