# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

Modules:
    mentorships: Mentorship request, transition and feedback endpoints.
    events: Event management and registration endpoints.
    profiles: Mentorship availability of the caller's profile.
"""

from fastapi import APIRouter

from mentorconnect.api.v1 import events, mentorships, profiles

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Include domain routers
router.include_router(mentorships.router, prefix="/mentorships", tags=["Mentorships"])
router.include_router(events.router, prefix="/events", tags=["Events"])
router.include_router(profiles.router, prefix="/profiles", tags=["Profiles"])

__all__ = ["router"]
