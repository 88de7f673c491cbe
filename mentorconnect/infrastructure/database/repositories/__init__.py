# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy implementations of the domain repository interfaces."""

from mentorconnect.infrastructure.database.repositories.event import SQLEventRepository
from mentorconnect.infrastructure.database.repositories.mentorship import (
    SQLMentorshipRepository,
    SQLProfileRepository,
    SQLUserRepository,
)

__all__ = [
    "SQLEventRepository",
    "SQLMentorshipRepository",
    "SQLProfileRepository",
    "SQLUserRepository",
]
