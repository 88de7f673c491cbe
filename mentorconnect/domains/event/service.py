# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event registration service.

This module provides the EventService class for:
- Event creation, update and deletion by organizers
- Registration with capacity and waitlist handling
- Registration cancellation
- Event listings, with the organizer attached

The stored event ``status`` is derived from the dates only when an event is
created or when an update touches ``start_date``/``end_date``. There is no
background refresh, so an event that ages past its start keeps its stored
status until the next date-touching write; use ``derive_event_status`` for
a real-time value.

Cancelling a registration never promotes a waitlisted attendee.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable
from uuid import uuid4

from mentorconnect.domains.authorization import GuardAction, can_transition
from mentorconnect.domains.errors import (
    ConcurrentModificationError,
    ConflictError,
    ForbiddenError,
    InputValidationError,
    InvalidStateError,
    NotFoundError,
)
from mentorconnect.domains.repositories import EventRepository, UserRepository
from mentorconnect.models.common import UserRole
from mentorconnect.models.event import (
    Attendee,
    AttendeeStatus,
    CreateEventRequest,
    Event,
    EventFilters,
    EventStatus,
    EventView,
    UpdateEventRequest,
)
from mentorconnect.models.user import UserRecord
from mentorconnect.utils.datetime import ensure_utc, has_passed, utc_now

logger = logging.getLogger(__name__)

# Fields an update may not clear by sending null
_REQUIRED_FIELDS = frozenset({
    "title",
    "description",
    "start_date",
    "end_date",
    "tags",
    "is_paid",
    "is_public",
    "status",
})


class EventNotFoundError(NotFoundError):
    """Raised when event is not found."""

    pass


class NotRegisteredError(NotFoundError):
    """Raised when the user holds no active registration for the event."""

    pass


class AlreadyRegisteredError(ConflictError):
    """Raised when the user is already registered or waitlisted."""

    pass


class RegistrationClosedError(InvalidStateError):
    """Raised when the registration deadline has passed."""

    pass


class EventCancelledError(InvalidStateError):
    """Raised when registering for a cancelled event."""

    pass


class NotOrganizerError(ForbiddenError):
    """Raised when a non-organizer tries to modify an event."""

    pass


class InvalidEventDatesError(InputValidationError):
    """Raised when an event would end before it starts."""

    pass


def derive_event_status(start: datetime, end: datetime, now: datetime) -> EventStatus:
    """Compute the event status implied by its dates.

    Args:
        start: Event start.
        end: Event end.
        now: Reference time.

    Returns:
        ``upcoming`` before start, ``completed`` after end, else ``ongoing``.
    """
    start, end, now = ensure_utc(start), ensure_utc(end), ensure_utc(now)
    if now < start:
        return EventStatus.UPCOMING
    if now > end:
        return EventStatus.COMPLETED
    return EventStatus.ONGOING


class EventService:
    """Service owning event attendee lists and derived status.

    Attributes:
        events: Event repository.
        users: User lookup for organizer details; reads omit the
            organizer when it is not set.
    """

    def __init__(
        self,
        events: EventRepository,
        users: UserRepository | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize event service.

        Args:
            events: Event repository.
            users: User lookup for organizer details.
            clock: Source of "now"; injectable for tests.
        """
        self.events = events
        self.users = users
        self._clock = clock

    async def create_event(
        self,
        organizer_id: str,
        request: CreateEventRequest,
    ) -> Event:
        """Create an event owned by the organizer.

        Raises:
            InvalidEventDatesError: If the event ends before it starts.
        """
        if ensure_utc(request.start_date) > ensure_utc(request.end_date):
            raise InvalidEventDatesError("End date must be after start date")

        now = self._clock()
        event = Event(
            id=str(uuid4()),
            organizer_id=organizer_id,
            attendees=[],
            status=derive_event_status(request.start_date, request.end_date, now),
            created_at=now,
            updated_at=now,
            **request.model_dump(),
        )

        created = await self.events.insert_one(event)

        logger.info(
            "Event created: id=%s, organizer=%s, capacity=%s",
            created.id,
            organizer_id,
            created.capacity,
        )

        return created

    async def update_event(
        self,
        event_id: str,
        actor_id: str,
        actor_role: UserRole | str | None,
        request: UpdateEventRequest,
    ) -> Event:
        """Apply a partial update, re-deriving status when dates change.

        Raises:
            EventNotFoundError: If event not found.
            NotOrganizerError: If the actor is neither organizer nor admin.
            InvalidEventDatesError: If the merged dates are inverted.
            ConcurrentModificationError: If the event changed meanwhile.
        """
        event = await self._get_event(event_id)

        if not can_transition(actor_id, actor_role, event, GuardAction.UPDATE_EVENT):
            raise NotOrganizerError("You are not authorized to update this event")

        patch: dict[str, Any] = {
            key: value
            for key, value in request.model_dump(exclude_unset=True).items()
            if value is not None or key not in _REQUIRED_FIELDS
        }
        now = self._clock()

        if "start_date" in patch or "end_date" in patch:
            start = patch.get("start_date", event.start_date)
            end = patch.get("end_date", event.end_date)
            if ensure_utc(start) > ensure_utc(end):
                raise InvalidEventDatesError("End date must be after start date")
            patch["status"] = derive_event_status(start, end, now)

        patch["updated_at"] = now
        updated = await self._write(event, patch)

        logger.info(
            "Event updated: id=%s, fields=%s, by=%s",
            event_id,
            ",".join(sorted(k for k in patch if k != "updated_at")),
            actor_id,
        )

        return updated

    async def delete_event(
        self,
        event_id: str,
        actor_id: str,
        actor_role: UserRole | str | None,
    ) -> None:
        """Delete an event (organizer or admin only).

        Raises:
            EventNotFoundError: If event not found.
            NotOrganizerError: If the actor is neither organizer nor admin.
        """
        event = await self._get_event(event_id)

        if not can_transition(actor_id, actor_role, event, GuardAction.DELETE_EVENT):
            raise NotOrganizerError("You are not authorized to delete this event")

        deleted = await self.events.delete_one(event_id)
        if deleted == 0:
            raise EventNotFoundError("Event not found")

        logger.info("Event deleted: id=%s, by=%s", event_id, actor_id)

    async def register(self, event_id: str, user_id: str) -> Event:
        """Register a user, waitlisting once capacity is reached.

        Args:
            event_id: Event identifier.
            user_id: Registering user.

        Returns:
            The updated event.

        Raises:
            EventNotFoundError: If event not found.
            AlreadyRegisteredError: If the user holds a non-cancelled entry.
            RegistrationClosedError: If the registration deadline has passed.
            EventCancelledError: If the event is cancelled.
            ConcurrentModificationError: If the event changed meanwhile.
        """
        event = await self._get_event(event_id)

        if event.find_active_attendee(user_id) is not None:
            raise AlreadyRegisteredError("User is already registered for this event")

        now = self._clock()
        if event.registration_deadline is not None and has_passed(
            event.registration_deadline, now
        ):
            raise RegistrationClosedError("Registration deadline has passed")

        if event.status == EventStatus.CANCELLED:
            raise EventCancelledError("Event has been cancelled")

        seats_taken = len(event.active_attendees())
        if event.capacity is None or seats_taken < event.capacity:
            status = AttendeeStatus.REGISTERED
        else:
            status = AttendeeStatus.WAITLISTED

        attendee = Attendee(
            user_id=user_id,
            registration_date=now,
            has_paid=not event.is_paid,
            status=status,
        )
        updated = await self._write(
            event,
            {"attendees": [*event.attendees, attendee], "updated_at": now},
        )

        logger.info(
            "Event registration: event=%s, user=%s, status=%s, seats=%d/%s",
            event_id,
            user_id,
            status.value,
            seats_taken + 1,
            event.capacity if event.capacity is not None else "unlimited",
        )

        return updated

    async def cancel_registration(self, event_id: str, user_id: str) -> Event:
        """Mark the user's registration cancelled, keeping the entry.

        Raises:
            EventNotFoundError: If event not found.
            NotRegisteredError: If the user has no non-cancelled entry.
            ConcurrentModificationError: If the event changed meanwhile.
        """
        event = await self._get_event(event_id)

        index = event.find_active_attendee(user_id)
        if index is None:
            raise NotRegisteredError("User is not registered for this event")

        attendees = list(event.attendees)
        attendees[index] = attendees[index].model_copy(
            update={"status": AttendeeStatus.CANCELLED}
        )
        updated = await self._write(
            event,
            {"attendees": attendees, "updated_at": self._clock()},
        )

        logger.info("Event registration cancelled: event=%s, user=%s", event_id, user_id)

        return updated

    async def get_event(self, event_id: str) -> Event:
        """Get an event by ID.

        Raises:
            EventNotFoundError: If event not found.
        """
        return await self._get_event(event_id)

    async def get_event_details(self, event_id: str) -> EventView:
        """Get an event with its organizer attached.

        Raises:
            EventNotFoundError: If event not found.
        """
        event = await self._get_event(event_id)
        (view,) = await self._with_organizers([event])
        return view

    async def list_events(self, filters: EventFilters | None = None) -> list[EventView]:
        """List events matching the filters, ordered by start date."""
        events = await self.events.find_all(filters or EventFilters())
        return await self._with_organizers(events)

    async def list_upcoming(self, limit: int = 5) -> list[EventView]:
        """List public events that have not started yet."""
        events = await self.events.find_upcoming(limit, self._clock())
        return await self._with_organizers(events)

    async def list_user_events(self, user_id: str) -> list[EventView]:
        """List events the user has an attendee entry in."""
        events = await self.events.find_by_attendee(user_id)
        return await self._with_organizers(events)

    async def list_organized_events(self, organizer_id: str) -> list[EventView]:
        """List events organized by the user."""
        events = await self.events.find_by_organizer(organizer_id)
        return await self._with_organizers(events)

    async def _with_organizers(self, events: list[Event]) -> list[EventView]:
        """Attach organizer users, looking each organizer up once.

        An organizer that no longer exists leaves ``organizer`` unset.
        """
        organizers: dict[str, UserRecord | None] = {}
        if self.users is not None:
            for organizer_id in {event.organizer_id for event in events}:
                organizers[organizer_id] = await self.users.find_user_by_id(organizer_id)

        return [
            EventView(**dict(event), organizer=organizers.get(event.organizer_id))
            for event in events
        ]

    async def _get_event(self, event_id: str) -> Event:
        event = await self.events.find_by_id(event_id)
        if event is None:
            raise EventNotFoundError("Event not found")
        return event

    async def _write(self, event: Event, patch: dict[str, Any]) -> Event:
        """Apply a conditional single-row write and return the fresh entity."""
        modified = await self.events.update_one(
            event.id,
            patch,
            expected_version=event.version,
        )
        if modified == 0:
            logger.warning(
                "Event write lost a race: id=%s, version=%d",
                event.id,
                event.version,
            )
            raise ConcurrentModificationError(
                "Event was modified concurrently, please retry"
            )

        return await self._get_event(event.id)
