# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event entity, attendee records and request/response models."""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from mentorconnect.models.common import Entity
from mentorconnect.models.user import UserRecord


class EventStatus(str, Enum):
    """Event-level status, derived from dates on date-touching writes."""

    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AttendeeStatus(str, Enum):
    """Status of one registration against an event."""

    REGISTERED = "registered"
    WAITLISTED = "waitlisted"
    ATTENDED = "attended"
    CANCELLED = "cancelled"


class Attendee(BaseModel):
    """A user's registration record against one event."""

    user_id: str
    registration_date: datetime
    has_paid: bool = False
    status: AttendeeStatus

    @property
    def is_active(self) -> bool:
        """Whether the entry still holds (or waits for) a seat."""
        return self.status != AttendeeStatus.CANCELLED


class EventLocation(BaseModel):
    """Where the event takes place."""

    type: Literal["virtual", "in-person", "hybrid"]
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    virtual_link: str | None = None


class Event(Entity):
    """Organizer-owned event with an ordered attendee list."""

    organizer_id: str
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    registration_deadline: datetime | None = None
    capacity: int | None = None
    location: EventLocation | None = None
    image_url: str | None = None
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_paid: bool = False
    price: float | None = None
    is_public: bool = True
    attendees: list[Attendee] = Field(default_factory=list)
    status: EventStatus = EventStatus.UPCOMING
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def active_attendees(self) -> list[Attendee]:
        """Attendee entries that are not cancelled."""
        return [a for a in self.attendees if a.is_active]

    def find_active_attendee(self, user_id: str) -> int | None:
        """Index of the user's non-cancelled entry, if any."""
        for index, attendee in enumerate(self.attendees):
            if attendee.user_id == user_id and attendee.is_active:
                return index
        return None


class EventView(Event):
    """Event as returned by reads, with the organizer attached when known."""

    organizer: UserRecord | None = None


class EventFilters(BaseModel):
    """Filters for listing events."""

    status: list[EventStatus] | None = None
    category: str | None = None
    tags: list[str] | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    is_public: bool = True
    limit: int = Field(default=20, ge=1, le=100)
    skip: int = Field(default=0, ge=0)


# =============================================================================
# API payloads
# =============================================================================


class CreateEventRequest(BaseModel):
    """Body of an event creation request."""

    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    start_date: datetime
    end_date: datetime
    registration_deadline: datetime | None = None
    capacity: int | None = Field(default=None, ge=1)
    location: EventLocation | None = None
    image_url: str | None = None
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_paid: bool = False
    price: float | None = Field(default=None, ge=0)
    is_public: bool = True


class UpdateEventRequest(BaseModel):
    """Partial event update; only fields that are set are written."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    start_date: datetime | None = None
    end_date: datetime | None = None
    registration_deadline: datetime | None = None
    capacity: int | None = Field(default=None, ge=1)
    location: EventLocation | None = None
    image_url: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    is_paid: bool | None = None
    price: float | None = Field(default=None, ge=0)
    is_public: bool | None = None
    status: EventStatus | None = None


class EventResponse(BaseModel):
    """Single event mutation response."""

    message: str
    event: Event


class EventDetailResponse(BaseModel):
    """Single event read response."""

    message: str
    event: EventView


class EventListResponse(BaseModel):
    """List of events."""

    events: list[EventView]
