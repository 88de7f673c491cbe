# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User and profile models consumed by the lifecycle services."""

from pydantic import BaseModel, ConfigDict, Field

from mentorconnect.models.common import UserRole


class UserRecord(BaseModel):
    """User identity as seen by the lifecycle services."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    role: UserRole = UserRole.STUDENT
    is_active: bool = True


class Availability(BaseModel):
    """Profile availability flags."""

    mentorship_available: bool = False


class ProfileRecord(BaseModel):
    """Profile attributes the mentorship lifecycle depends on."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    availability: Availability = Field(default_factory=Availability)


class UpdateAvailabilityRequest(BaseModel):
    """Request to toggle whether the caller accepts mentorship requests."""

    mentorship_available: bool = Field(description="Accept new mentorship requests")


class ProfileResponse(BaseModel):
    """Profile mutation response."""

    message: str
    profile: ProfileRecord
