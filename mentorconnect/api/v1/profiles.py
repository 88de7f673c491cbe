# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Profile endpoints.

- PUT /me/availability - Toggle whether the caller accepts mentorship requests
"""

from fastapi import APIRouter, Depends

from mentorconnect.api.dependencies import get_mentorship_service, require_auth
from mentorconnect.api.middleware.auth import CurrentUser
from mentorconnect.domains.mentorship import MentorshipService
from mentorconnect.models.user import ProfileResponse, UpdateAvailabilityRequest

router = APIRouter()


@router.put(
    "/me/availability",
    response_model=ProfileResponse,
    summary="Set mentorship availability",
)
async def update_my_availability(
    data: UpdateAvailabilityRequest,
    current_user: CurrentUser = Depends(require_auth),
    service: MentorshipService = Depends(get_mentorship_service),
) -> ProfileResponse:
    """Set the caller's mentorship availability.

    Existing mentorships are not affected.
    """
    profile = await service.set_availability(current_user.id, data.mentorship_available)
    return ProfileResponse(message="Availability updated", profile=profile)
