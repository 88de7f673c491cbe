# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event API endpoints.

This module provides endpoints for events and registrations:
- POST / - Create an event organized by the caller
- GET / - List public events with filtering
- GET /upcoming - Next public events that have not started
- GET /mine - Events the caller registered for
- GET /organized - Events the caller organizes
- GET /{event_id} - Event details with the organizer
- PUT /{event_id} - Update event (organizer or admin)
- DELETE /{event_id} - Delete event (organizer or admin)
- POST /{event_id}/register - Register, or join the waitlist when full
- POST /{event_id}/cancel - Cancel the caller's registration

Listing and detail endpoints are public; everything else requires a
Bearer token.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from mentorconnect.api.dependencies import get_event_service, require_auth
from mentorconnect.api.middleware.auth import CurrentUser
from mentorconnect.domains.event import EventService
from mentorconnect.models.common import MessageResponse
from mentorconnect.models.event import (
    AttendeeStatus,
    CreateEventRequest,
    EventDetailResponse,
    EventFilters,
    EventListResponse,
    EventResponse,
    EventStatus,
    UpdateEventRequest,
)

router = APIRouter()


@router.post(
    "",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create event",
)
async def create_event(
    data: CreateEventRequest,
    current_user: CurrentUser = Depends(require_auth),
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    """Create an event with the caller as organizer."""
    event = await service.create_event(current_user.id, data)
    return EventResponse(message="Event created successfully", event=event)


@router.get(
    "",
    response_model=EventListResponse,
    summary="List events",
)
async def list_events(
    status_filter: list[EventStatus] | None = Query(default=None, alias="status"),
    category: str | None = Query(default=None),
    tags: list[str] | None = Query(default=None),
    start_date: datetime | None = Query(default=None),
    end_date: datetime | None = Query(default=None),
    is_public: bool = Query(default=True),
    limit: int = Query(default=20, ge=1, le=100),
    skip: int = Query(default=0, ge=0),
    service: EventService = Depends(get_event_service),
) -> EventListResponse:
    """List events ordered by start date."""
    filters = EventFilters(
        status=status_filter,
        category=category,
        tags=tags,
        start_date=start_date,
        end_date=end_date,
        is_public=is_public,
        limit=limit,
        skip=skip,
    )
    events = await service.list_events(filters)
    return EventListResponse(events=events)


@router.get(
    "/upcoming",
    response_model=EventListResponse,
    summary="List upcoming events",
)
async def list_upcoming_events(
    limit: int = Query(default=5, ge=1, le=50),
    service: EventService = Depends(get_event_service),
) -> EventListResponse:
    """List the next public events that have not started yet."""
    events = await service.list_upcoming(limit)
    return EventListResponse(events=events)


@router.get(
    "/mine",
    response_model=EventListResponse,
    summary="List my registrations",
)
async def list_my_events(
    current_user: CurrentUser = Depends(require_auth),
    service: EventService = Depends(get_event_service),
) -> EventListResponse:
    """List events the caller holds an attendee entry in."""
    events = await service.list_user_events(current_user.id)
    return EventListResponse(events=events)


@router.get(
    "/organized",
    response_model=EventListResponse,
    summary="List organized events",
)
async def list_organized_events(
    current_user: CurrentUser = Depends(require_auth),
    service: EventService = Depends(get_event_service),
) -> EventListResponse:
    """List events organized by the caller."""
    events = await service.list_organized_events(current_user.id)
    return EventListResponse(events=events)


@router.get(
    "/{event_id}",
    response_model=EventDetailResponse,
    summary="Get event",
)
async def get_event(
    event_id: str,
    service: EventService = Depends(get_event_service),
) -> EventDetailResponse:
    """Get an event by ID."""
    event = await service.get_event_details(event_id)
    return EventDetailResponse(message="Event retrieved", event=event)


@router.put(
    "/{event_id}",
    response_model=EventResponse,
    summary="Update event",
)
async def update_event(
    event_id: str,
    data: UpdateEventRequest,
    current_user: CurrentUser = Depends(require_auth),
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    """Apply a partial update to the event."""
    event = await service.update_event(event_id, current_user.id, current_user.role, data)
    return EventResponse(message="Event updated successfully", event=event)


@router.delete(
    "/{event_id}",
    response_model=MessageResponse,
    summary="Delete event",
)
async def delete_event(
    event_id: str,
    current_user: CurrentUser = Depends(require_auth),
    service: EventService = Depends(get_event_service),
) -> MessageResponse:
    """Delete the event."""
    await service.delete_event(event_id, current_user.id, current_user.role)
    return MessageResponse(message="Event deleted successfully")


@router.post(
    "/{event_id}/register",
    response_model=EventResponse,
    summary="Register for event",
)
async def register_for_event(
    event_id: str,
    current_user: CurrentUser = Depends(require_auth),
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    """Register the caller, waitlisting once the event is full."""
    event = await service.register(event_id, current_user.id)

    index = event.find_active_attendee(current_user.id)
    waitlisted = (
        index is not None and event.attendees[index].status == AttendeeStatus.WAITLISTED
    )
    message = (
        "Added to the event waitlist"
        if waitlisted
        else "Successfully registered for event"
    )
    return EventResponse(message=message, event=event)


@router.post(
    "/{event_id}/cancel",
    response_model=EventResponse,
    summary="Cancel registration",
)
async def cancel_registration(
    event_id: str,
    current_user: CurrentUser = Depends(require_auth),
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    """Cancel the caller's registration; the entry stays in the list."""
    event = await service.cancel_registration(event_id, current_user.id)
    return EventResponse(message="Registration cancelled successfully", event=event)
