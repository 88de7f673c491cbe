# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Mentorship domain package.

This package provides the mentorship lifecycle including:
- Mentorship requests
- Whitelisted status transitions
- Mentor and mentee feedback
"""

from mentorconnect.domains.mentorship.service import (
    ALLOWED_TRANSITIONS,
    IllegalTransitionError,
    InvalidRatingError,
    MentorNotFoundError,
    MentorUnavailableError,
    MentorshipExistsError,
    MentorshipNotFoundError,
    MentorshipService,
    NotParticipantError,
    ParticipantMissingError,
    SelfMentorshipError,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "MentorshipService",
    "MentorshipNotFoundError",
    "MentorNotFoundError",
    "MentorUnavailableError",
    "MentorshipExistsError",
    "IllegalTransitionError",
    "NotParticipantError",
    "ParticipantMissingError",
    "InvalidRatingError",
    "SelfMentorshipError",
]
