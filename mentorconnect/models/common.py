# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Common models shared across domains."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """Platform-wide user role."""

    STUDENT = "student"
    ALUMNI = "alumni"
    ADMIN = "admin"


class Entity(BaseModel):
    """Base for persisted lifecycle entities.

    ``version`` is the optimistic concurrency token: it starts at 1 and
    every successful write increments it.
    """

    model_config = ConfigDict(from_attributes=True, use_enum_values=False)

    id: str = Field(description="Entity identifier")
    version: int = Field(default=1, ge=1, description="Optimistic concurrency token")


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str = Field(description="Human-readable outcome")


class ErrorResponse(BaseModel):
    """Failure body returned for every lifecycle error."""

    message: str = Field(description="Human-readable failure description")
    error: str | None = Field(default=None, description="Error kind")
