# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- A pinned clock
- In-memory repositories seeded with a mentor, a mentee and an admin
- Lifecycle services wired to those repositories
"""

import pytest

from mentorconnect.core.config import clear_settings_cache
from mentorconnect.domains.event import EventService
from mentorconnect.domains.mentorship import MentorshipService
from mentorconnect.models.common import UserRole
from mentorconnect.models.user import UserRecord
from tests.fakes import (
    ADMIN_ID,
    MENTEE_ID,
    MENTOR_ID,
    NOW,
    OUTSIDER_ID,
    FrozenClock,
    InMemoryEventRepository,
    InMemoryMentorshipRepository,
    InMemoryProfileRepository,
    InMemoryUserRepository,
)


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Make every test see settings built from its own environment."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Domain Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(NOW)


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository([
        UserRecord(id=MENTOR_ID, email="mentor@example.com", role=UserRole.ALUMNI),
        UserRecord(id=MENTEE_ID, email="mentee@example.com", role=UserRole.STUDENT),
        UserRecord(id=ADMIN_ID, email="admin@example.com", role=UserRole.ADMIN),
        UserRecord(id=OUTSIDER_ID, email="outsider@example.com", role=UserRole.STUDENT),
    ])


@pytest.fixture
def profiles() -> InMemoryProfileRepository:
    repo = InMemoryProfileRepository()
    repo.add(MENTOR_ID, mentorship_available=True)
    repo.add(MENTEE_ID, mentorship_available=False)
    return repo


@pytest.fixture
def mentorships() -> InMemoryMentorshipRepository:
    return InMemoryMentorshipRepository()


@pytest.fixture
def events() -> InMemoryEventRepository:
    return InMemoryEventRepository()


@pytest.fixture
def mentorship_service(mentorships, users, profiles, clock) -> MentorshipService:
    return MentorshipService(mentorships, users, profiles, clock=clock)


@pytest.fixture
def event_service(events, users, clock) -> EventService:
    return EventService(events, users, clock=clock)


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line(
        "markers", "integration: mark test as an API test using in-memory repositories"
    )
