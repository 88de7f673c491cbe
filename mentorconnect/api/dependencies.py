# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get database sessions
- Get authenticated users
- Get service instances wired to SQL repositories

Example:
    @router.get("/mentorships/mine")
    async def my_mentorships(
        current_user: CurrentUser = Depends(require_auth),
        service: MentorshipService = Depends(get_mentorship_service),
    ):
        ...
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from mentorconnect.api.middleware.auth import CurrentUser, get_current_user
from mentorconnect.core.config import get_settings
from mentorconnect.domains.event import EventService
from mentorconnect.domains.mentorship import MentorshipService
from mentorconnect.infrastructure.database.connection import (
    close_database,
    get_session,
    init_database,
)
from mentorconnect.infrastructure.database.repositories import (
    SQLEventRepository,
    SQLMentorshipRepository,
    SQLProfileRepository,
    SQLUserRepository,
)

logger = logging.getLogger(__name__)


async def init_db() -> None:
    """Initialize the database connection pool."""
    await init_database(get_settings())


async def close_db() -> None:
    """Close the database connection pool."""
    await close_database()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session committed at the end of the request.

    Yields:
        AsyncSession for the MentorConnect database.
    """
    async with get_session() as session:
        yield session


# =========================================================================
# Authentication Dependencies
# =========================================================================


def require_auth(request: Request) -> CurrentUser:
    """Require authenticated user.

    Raises:
        HTTPException: 401 if not authenticated.
    """
    user = get_current_user(request)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


# =========================================================================
# Service Dependencies
# =========================================================================


def get_mentorship_service(db: AsyncSession = Depends(get_db)) -> MentorshipService:
    """Get a mentorship service bound to the request session."""
    return MentorshipService(
        mentorships=SQLMentorshipRepository(db),
        users=SQLUserRepository(db),
        profiles=SQLProfileRepository(db),
    )


def get_event_service(db: AsyncSession = Depends(get_db)) -> EventService:
    """Get an event service bound to the request session."""
    return EventService(
        events=SQLEventRepository(db),
        users=SQLUserRepository(db),
    )
