# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Mentorship entity and request/response models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from mentorconnect.models.common import Entity
from mentorconnect.models.user import ProfileRecord, UserRecord


class MentorshipStatus(str, Enum):
    """Mentorship lifecycle states."""

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    DECLINED = "declined"
    CANCELED = "canceled"


# States that block a second request for the same (mentor, mentee) pair
OPEN_STATUSES = frozenset({MentorshipStatus.PENDING, MentorshipStatus.ACTIVE})


class MeetingFrequency(str, Enum):
    """How often the pair intends to meet."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    AS_NEEDED = "asNeeded"


class MeetingPreference(str, Enum):
    """Preferred meeting format."""

    IN_PERSON = "inPerson"
    VIRTUAL = "virtual"
    BOTH = "both"


class FeedbackEntry(BaseModel):
    """One party's feedback on a mentorship."""

    rating: int
    comment: str | None = None
    date: datetime


class MentorshipFeedback(BaseModel):
    """Independent feedback slots for each side of the mentorship."""

    mentor_feedback: FeedbackEntry | None = None
    mentee_feedback: FeedbackEntry | None = None


class MentorshipDetails(BaseModel):
    """Descriptive attributes supplied by the mentee when requesting."""

    request_message: str | None = Field(default=None, max_length=2000)
    goals: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    meeting_frequency: MeetingFrequency | None = None
    meeting_preference: MeetingPreference | None = None


class Mentorship(Entity):
    """Tracked mentor/mentee relationship with an explicit status."""

    mentor_id: str
    mentee_id: str
    status: MentorshipStatus = MentorshipStatus.PENDING
    request_message: str | None = None
    goals: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    meeting_frequency: MeetingFrequency | None = None
    meeting_preference: MeetingPreference | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    feedback: MentorshipFeedback | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_participant(self, user_id: str) -> bool:
        """Check whether the user is the mentor or mentee of record."""
        return user_id in (self.mentor_id, self.mentee_id)


# =============================================================================
# API payloads
# =============================================================================


class RequestMentorshipRequest(MentorshipDetails):
    """Body of a mentorship request sent by a mentee."""

    mentor_id: str = Field(min_length=1, description="Requested mentor")


class UpdateMentorshipStatusRequest(BaseModel):
    """Body of a status transition request."""

    status: MentorshipStatus
    notes: str | None = Field(default=None, max_length=5000)


class SubmitFeedbackRequest(BaseModel):
    """Body of a feedback submission.

    The rating range is enforced by the service so that out-of-range
    values surface as a lifecycle validation error.
    """

    rating: int
    comment: str | None = Field(default=None, max_length=2000)


class MentorshipResponse(BaseModel):
    """Single mentorship mutation response."""

    message: str
    mentorship: Mentorship


class MentorshipWithParticipants(BaseModel):
    """A mentorship together with both parties and their profiles."""

    mentorship: Mentorship
    mentor: UserRecord
    mentee: UserRecord
    mentor_profile: ProfileRecord | None = None
    mentee_profile: ProfileRecord | None = None


class MentorshipDetailResponse(MentorshipWithParticipants):
    """Mentorship read response."""

    message: str


class MentorshipListResponse(BaseModel):
    """List of mentorships."""

    mentorships: list[Mentorship]
