# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Error taxonomy shared by the lifecycle services.

Every failure a lifecycle operation can report belongs to exactly one
``ErrorKind``. Services raise specific subclasses (``MentorNotFoundError``,
``AlreadyRegisteredError``, ...) so callers can be precise, while the HTTP
layer only needs the kind to pick a status code.

A failed operation never leaves a partial write behind: every check runs
before the single persisted update.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of user-visible failure kinds."""

    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    INVALID_STATE = "invalid_state"
    CONFLICT = "conflict"
    VALIDATION = "validation"


class LifecycleError(Exception):
    """Base exception for lifecycle service errors.

    Attributes:
        kind: Taxonomy bucket of the error.
        message: Human-readable description returned to the caller.
    """

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(LifecycleError):
    """Raised when a referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class ForbiddenError(LifecycleError):
    """Raised when the actor lacks the role required for an action."""

    kind = ErrorKind.FORBIDDEN


class InvalidStateError(LifecycleError):
    """Raised for illegal transitions or closed windows."""

    kind = ErrorKind.INVALID_STATE


class ConflictError(LifecycleError):
    """Raised for duplicates and lost optimistic-concurrency races."""

    kind = ErrorKind.CONFLICT


class InputValidationError(LifecycleError):
    """Raised when input is malformed or out of range."""

    kind = ErrorKind.VALIDATION


class ConcurrentModificationError(ConflictError):
    """Raised when an entity changed between read and conditional write."""

    pass
