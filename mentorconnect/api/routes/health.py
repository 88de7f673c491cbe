# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check endpoints.

This module provides health and readiness endpoints for the API.
"""

import logging
import time
from datetime import datetime

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from mentorconnect import __version__
from mentorconnect.core.config import get_settings
from mentorconnect.infrastructure.database.connection import check_database_connection
from mentorconnect.utils.datetime import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(description="Current server timestamp")
    version: str = Field(description="API version")
    environment: str = Field(description="Deployment environment")
    uptime_seconds: int = Field(description="Server uptime in seconds")


class ReadinessResponse(BaseModel):
    """Readiness check response model."""
    ready: bool = Field(description="Whether the service is ready")
    checks: dict[str, bool] = Field(description="Individual check results")


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness check; does not touch the database."""
    return HealthResponse(
        status="healthy",
        timestamp=utc_now(),
        version=__version__,
        environment=get_settings().environment,
        uptime_seconds=int(time.time() - _server_start_time),
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness() -> JSONResponse:
    """Readiness check; answers 503 until the database is reachable."""
    database_ok = await check_database_connection()
    if not database_ok:
        logger.warning("Readiness check failed: database unreachable")

    body = ReadinessResponse(ready=database_ok, checks={"database": database_ok})
    return JSONResponse(
        status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(),
    )
