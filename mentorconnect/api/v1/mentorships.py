# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Mentorship API endpoints.

This module provides endpoints for the mentorship lifecycle:
- POST / - Request mentorship from a mentor
- GET /requests - Mentorships where the caller is the mentor
- GET /mine - Mentorships where the caller is the mentee
- GET /{mentorship_id} - Mentorship with both parties and their profiles
  (participants and admins)
- PUT /{mentorship_id}/status - Accept, decline, cancel or complete
- POST /{mentorship_id}/feedback - Rate the mentorship

Service errors are translated to HTTP responses by the handlers in
``mentorconnect.api.errors``.

Example:
    POST /api/v1/mentorships
    {
        "mentor_id": "9a4c...",
        "request_message": "I'd like help preparing for interviews",
        "goals": ["interview prep"],
        "meeting_frequency": "biweekly"
    }
"""

from fastapi import APIRouter, Depends, Query, status

from mentorconnect.api.dependencies import get_mentorship_service, require_auth
from mentorconnect.api.middleware.auth import CurrentUser
from mentorconnect.domains.mentorship import MentorshipService
from mentorconnect.models.mentorship import (
    MentorshipDetailResponse,
    MentorshipDetails,
    MentorshipListResponse,
    MentorshipResponse,
    MentorshipStatus,
    RequestMentorshipRequest,
    SubmitFeedbackRequest,
    UpdateMentorshipStatusRequest,
)

router = APIRouter()

_STATUS_MESSAGES = {
    MentorshipStatus.ACTIVE: "Mentorship request accepted",
    MentorshipStatus.DECLINED: "Mentorship request declined",
    MentorshipStatus.CANCELED: "Mentorship request canceled",
    MentorshipStatus.COMPLETED: "Mentorship marked as completed",
}


@router.post(
    "",
    response_model=MentorshipResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request mentorship",
)
async def request_mentorship(
    data: RequestMentorshipRequest,
    current_user: CurrentUser = Depends(require_auth),
    service: MentorshipService = Depends(get_mentorship_service),
) -> MentorshipResponse:
    """Create a pending mentorship with the caller as mentee."""
    details = MentorshipDetails.model_validate(data.model_dump(exclude={"mentor_id"}))
    mentorship = await service.request_mentorship(
        mentee_id=current_user.id,
        mentor_id=data.mentor_id,
        details=details,
    )
    return MentorshipResponse(
        message="Mentorship request sent successfully",
        mentorship=mentorship,
    )


@router.get(
    "/requests",
    response_model=MentorshipListResponse,
    summary="List mentorships as mentor",
)
async def list_mentorship_requests(
    status_filter: MentorshipStatus | None = Query(default=None, alias="status"),
    current_user: CurrentUser = Depends(require_auth),
    service: MentorshipService = Depends(get_mentorship_service),
) -> MentorshipListResponse:
    """List mentorships where the caller is the mentor, newest first."""
    mentorships = await service.list_as_mentor(current_user.id, status_filter)
    return MentorshipListResponse(mentorships=mentorships)


@router.get(
    "/mine",
    response_model=MentorshipListResponse,
    summary="List mentorships as mentee",
)
async def list_my_mentorships(
    status_filter: MentorshipStatus | None = Query(default=None, alias="status"),
    current_user: CurrentUser = Depends(require_auth),
    service: MentorshipService = Depends(get_mentorship_service),
) -> MentorshipListResponse:
    """List mentorships where the caller is the mentee, newest first."""
    mentorships = await service.list_as_mentee(current_user.id, status_filter)
    return MentorshipListResponse(mentorships=mentorships)


@router.get(
    "/{mentorship_id}",
    response_model=MentorshipDetailResponse,
    summary="Get mentorship",
)
async def get_mentorship(
    mentorship_id: str,
    current_user: CurrentUser = Depends(require_auth),
    service: MentorshipService = Depends(get_mentorship_service),
) -> MentorshipDetailResponse:
    """Get a mentorship the caller takes part in, with mentor and mentee."""
    details = await service.get_mentorship_details(
        mentorship_id,
        current_user.id,
        actor_role=current_user.role,
    )
    return MentorshipDetailResponse(message="Mentorship retrieved", **dict(details))


@router.put(
    "/{mentorship_id}/status",
    response_model=MentorshipResponse,
    summary="Change mentorship status",
)
async def update_mentorship_status(
    mentorship_id: str,
    data: UpdateMentorshipStatusRequest,
    current_user: CurrentUser = Depends(require_auth),
    service: MentorshipService = Depends(get_mentorship_service),
) -> MentorshipResponse:
    """Move the mentorship to a new status."""
    mentorship = await service.update_status(
        mentorship_id,
        current_user.id,
        data.status,
        notes=data.notes,
        actor_role=current_user.role,
    )
    return MentorshipResponse(
        message=_STATUS_MESSAGES.get(data.status, "Mentorship updated"),
        mentorship=mentorship,
    )


@router.post(
    "/{mentorship_id}/feedback",
    response_model=MentorshipResponse,
    summary="Submit mentorship feedback",
)
async def submit_feedback(
    mentorship_id: str,
    data: SubmitFeedbackRequest,
    current_user: CurrentUser = Depends(require_auth),
    service: MentorshipService = Depends(get_mentorship_service),
) -> MentorshipResponse:
    """Record the caller's rating in their feedback slot."""
    mentorship = await service.submit_feedback(
        mentorship_id,
        current_user.id,
        data.rating,
        comment=data.comment,
    )
    return MentorshipResponse(
        message="Feedback submitted successfully",
        mentorship=mentorship,
    )
