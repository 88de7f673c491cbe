# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event domain package.

This package provides event registration functionality including:
- Event creation, update and deletion
- Registration with capacity and waitlist
- Registration cancellation
"""

from mentorconnect.domains.event.service import (
    AlreadyRegisteredError,
    EventCancelledError,
    EventNotFoundError,
    EventService,
    InvalidEventDatesError,
    NotOrganizerError,
    NotRegisteredError,
    RegistrationClosedError,
    derive_event_status,
)

__all__ = [
    "EventService",
    "derive_event_status",
    "EventNotFoundError",
    "NotRegisteredError",
    "AlreadyRegisteredError",
    "RegistrationClosedError",
    "EventCancelledError",
    "NotOrganizerError",
    "InvalidEventDatesError",
]
