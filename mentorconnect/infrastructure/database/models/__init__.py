# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy ORM models."""

from mentorconnect.infrastructure.database.models.base import Base
from mentorconnect.infrastructure.database.models.event import EventRow
from mentorconnect.infrastructure.database.models.mentorship import MentorshipRow
from mentorconnect.infrastructure.database.models.user import ProfileRow, UserRow

__all__ = [
    "Base",
    "UserRow",
    "ProfileRow",
    "MentorshipRow",
    "EventRow",
]
