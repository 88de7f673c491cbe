# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exception handlers translating service errors into HTTP responses.

Every failure body has the shape ``{"message": ..., "error": ...}`` where
``error`` is the error kind.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from mentorconnect.domains.errors import ErrorKind, LifecycleError
from mentorconnect.infrastructure.database.connection import DatabaseError
from mentorconnect.models.common import ErrorResponse

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_STATE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.VALIDATION: 422,
}


def _error_response(status_code: int, message: str, error: str) -> JSONResponse:
    body = ErrorResponse(message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def handle_lifecycle_error(request: Request, exc: LifecycleError) -> JSONResponse:
    """Map a taxonomy error to its status code."""
    logger.info(
        "Request rejected: %s %s -> %s (%s)",
        request.method,
        request.url.path,
        exc.kind.value,
        type(exc).__name__,
    )
    return _error_response(STATUS_BY_KIND[exc.kind], exc.message, exc.kind.value)


async def handle_request_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed request bodies in the common error shape."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return _error_response(422, message, ErrorKind.VALIDATION.value)


async def handle_database_error(request: Request, exc: DatabaseError) -> JSONResponse:
    """Hide storage failures behind a generic internal error."""
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "internal"
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on the application."""
    app.add_exception_handler(LifecycleError, handle_lifecycle_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(DatabaseError, handle_database_error)
