# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Mentorship lifecycle service.

This module provides the MentorshipService class for:
- Mentorship requests from mentees
- Status transitions (accept, decline, cancel, complete)
- Per-party feedback
- Participant-scoped reads, optionally with both parties attached

Status transitions follow an explicit whitelist; anything not listed in
ALLOWED_TRANSITIONS is rejected before authorization is even consulted.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable
from uuid import uuid4

from mentorconnect.domains.authorization import (
    GuardAction,
    action_for_status,
    can_transition,
)
from mentorconnect.domains.errors import (
    ConcurrentModificationError,
    ConflictError,
    ForbiddenError,
    InputValidationError,
    InvalidStateError,
    NotFoundError,
)
from mentorconnect.domains.repositories import (
    DuplicateRecordError,
    MentorshipRepository,
    ProfileRepository,
    UserRepository,
)
from mentorconnect.models.common import UserRole
from mentorconnect.models.mentorship import (
    FeedbackEntry,
    Mentorship,
    MentorshipDetails,
    MentorshipFeedback,
    MentorshipStatus,
    MentorshipWithParticipants,
)
from mentorconnect.models.user import ProfileRecord
from mentorconnect.utils.datetime import utc_now

logger = logging.getLogger(__name__)

RATING_MIN = 1
RATING_MAX = 5

ALLOWED_TRANSITIONS: frozenset[tuple[MentorshipStatus, MentorshipStatus]] = frozenset({
    (MentorshipStatus.PENDING, MentorshipStatus.ACTIVE),
    (MentorshipStatus.PENDING, MentorshipStatus.DECLINED),
    (MentorshipStatus.PENDING, MentorshipStatus.CANCELED),
    (MentorshipStatus.ACTIVE, MentorshipStatus.COMPLETED),
})

_FORBIDDEN_MESSAGES = {
    GuardAction.ACCEPT: "Only the mentor can accept or decline a mentorship request",
    GuardAction.DECLINE: "Only the mentor can accept or decline a mentorship request",
    GuardAction.CANCEL: "Only the mentee can cancel a mentorship request",
    GuardAction.COMPLETE: "You are not authorized to update this mentorship",
}


class MentorshipNotFoundError(NotFoundError):
    """Raised when mentorship is not found."""

    pass


class MentorNotFoundError(NotFoundError):
    """Raised when the requested mentor does not exist."""

    pass


class MentorUnavailableError(InvalidStateError):
    """Raised when the mentor is not accepting mentorship requests."""

    pass


class ParticipantMissingError(NotFoundError):
    """Raised when a mentorship party no longer has a user record."""

    pass


class MentorshipExistsError(ConflictError):
    """Raised when the pair already has a pending or active mentorship."""

    pass


class IllegalTransitionError(InvalidStateError):
    """Raised when a status change is not in the transition whitelist."""

    pass


class NotParticipantError(ForbiddenError):
    """Raised when the actor lacks the role required for the action."""

    pass


class InvalidRatingError(InputValidationError):
    """Raised when a feedback rating is out of range."""

    pass


class SelfMentorshipError(InputValidationError):
    """Raised when a user requests mentorship from themselves."""

    pass


class MentorshipService:
    """Service owning the mentorship state machine.

    Attributes:
        mentorships: Mentorship repository.
        users: User lookup.
        profiles: Profile lookup.
    """

    def __init__(
        self,
        mentorships: MentorshipRepository,
        users: UserRepository,
        profiles: ProfileRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize mentorship service.

        Args:
            mentorships: Mentorship repository.
            users: User lookup used to validate the mentor.
            profiles: Profile lookup used to check mentor availability.
            clock: Source of "now"; injectable for tests.
        """
        self.mentorships = mentorships
        self.users = users
        self.profiles = profiles
        self._clock = clock

    async def request_mentorship(
        self,
        mentee_id: str,
        mentor_id: str,
        details: MentorshipDetails | None = None,
    ) -> Mentorship:
        """Create a pending mentorship request.

        Args:
            mentee_id: Requesting user.
            mentor_id: Requested mentor.
            details: Descriptive attributes of the request.

        Returns:
            The new mentorship in ``pending``.

        Raises:
            SelfMentorshipError: If mentee and mentor are the same user.
            MentorNotFoundError: If the mentor does not exist.
            MentorUnavailableError: If the mentor does not accept requests.
            MentorshipExistsError: If the pair already has an open mentorship.
        """
        if mentee_id == mentor_id:
            raise SelfMentorshipError("You cannot request mentorship from yourself")

        mentor = await self.users.find_user_by_id(mentor_id)
        if mentor is None:
            raise MentorNotFoundError("Mentor not found")

        profile = await self.profiles.find_profile_by_user_id(mentor_id)
        if (
            not mentor.is_active
            or profile is None
            or not profile.availability.mentorship_available
        ):
            raise MentorUnavailableError("Mentor is not available for mentorship")

        existing = await self.mentorships.find_open_between(mentor_id, mentee_id)
        if existing:
            raise MentorshipExistsError(
                "You already have a pending or active mentorship with this mentor"
            )

        details = details or MentorshipDetails()
        now = self._clock()
        mentorship = Mentorship(
            id=str(uuid4()),
            mentor_id=mentor_id,
            mentee_id=mentee_id,
            status=MentorshipStatus.PENDING,
            created_at=now,
            updated_at=now,
            **details.model_dump(),
        )

        try:
            created = await self.mentorships.insert_one(mentorship)
        except DuplicateRecordError as e:
            raise MentorshipExistsError(
                "You already have a pending or active mentorship with this mentor"
            ) from e

        logger.info(
            "Mentorship requested: id=%s, mentor=%s, mentee=%s",
            created.id,
            mentor_id,
            mentee_id,
        )

        return created

    async def update_status(
        self,
        mentorship_id: str,
        actor_id: str,
        new_status: MentorshipStatus | str,
        notes: str | None = None,
        actor_role: UserRole | str | None = None,
    ) -> Mentorship:
        """Move a mentorship along the transition whitelist.

        Args:
            mentorship_id: Mentorship identifier.
            actor_id: User performing the transition.
            new_status: Target status.
            notes: Optional notes stored with the mentorship.
            actor_role: Actor's platform role, for the admin override.

        Returns:
            The updated mentorship.

        Raises:
            MentorshipNotFoundError: If the mentorship does not exist.
            InputValidationError: If ``new_status`` is not a known status.
            IllegalTransitionError: If the transition is not whitelisted.
            NotParticipantError: If the actor may not perform it.
            ConcurrentModificationError: If the mentorship changed meanwhile.
        """
        mentorship = await self._get_mentorship(mentorship_id)

        try:
            target = MentorshipStatus(new_status)
        except ValueError:
            raise InputValidationError(f"Unknown mentorship status: {new_status}")

        if (mentorship.status, target) not in ALLOWED_TRANSITIONS:
            raise IllegalTransitionError(
                f"Cannot change mentorship from {mentorship.status.value} to {target.value}"
            )

        action = action_for_status(target)
        if not can_transition(actor_id, actor_role, mentorship, action):
            raise NotParticipantError(_FORBIDDEN_MESSAGES[action])

        now = self._clock()
        patch: dict[str, Any] = {"status": target, "updated_at": now}
        if notes:
            patch["notes"] = notes
        if target == MentorshipStatus.ACTIVE:
            patch["start_date"] = now
        elif target == MentorshipStatus.COMPLETED:
            patch["end_date"] = now

        updated = await self._write(mentorship, patch)

        logger.info(
            "Mentorship status changed: id=%s, %s -> %s, by=%s",
            mentorship_id,
            mentorship.status.value,
            target.value,
            actor_id,
        )

        return updated

    async def submit_feedback(
        self,
        mentorship_id: str,
        actor_id: str,
        rating: int,
        comment: str | None = None,
    ) -> Mentorship:
        """Record feedback in the slot matching the actor's role.

        A second submission by the same party overwrites the first.

        Args:
            mentorship_id: Mentorship identifier.
            actor_id: Mentor or mentee of record.
            rating: Rating between RATING_MIN and RATING_MAX.
            comment: Optional free-text comment.

        Returns:
            The updated mentorship.

        Raises:
            InvalidRatingError: If rating is out of range.
            MentorshipNotFoundError: If the mentorship does not exist.
            NotParticipantError: If the actor is not a participant.
            ConcurrentModificationError: If the mentorship changed meanwhile.
        """
        if isinstance(rating, bool) or not RATING_MIN <= rating <= RATING_MAX:
            raise InvalidRatingError(
                f"Rating must be between {RATING_MIN} and {RATING_MAX}"
            )

        mentorship = await self._get_mentorship(mentorship_id)

        if not can_transition(actor_id, None, mentorship, GuardAction.SUBMIT_FEEDBACK):
            raise NotParticipantError(
                "You are not authorized to add feedback to this mentorship"
            )

        now = self._clock()
        entry = FeedbackEntry(rating=rating, comment=comment, date=now)
        feedback = (mentorship.feedback or MentorshipFeedback()).model_copy()
        if mentorship.mentor_id == actor_id:
            feedback.mentor_feedback = entry
        else:
            feedback.mentee_feedback = entry

        updated = await self._write(mentorship, {"feedback": feedback, "updated_at": now})

        logger.info(
            "Mentorship feedback recorded: id=%s, by=%s, rating=%d",
            mentorship_id,
            actor_id,
            rating,
        )

        return updated

    async def get_mentorship(
        self,
        mentorship_id: str,
        actor_id: str,
        actor_role: UserRole | str | None = None,
    ) -> Mentorship:
        """Get a mentorship visible to the actor.

        Raises:
            MentorshipNotFoundError: If the mentorship does not exist.
            NotParticipantError: If the actor is neither participant nor admin.
        """
        mentorship = await self._get_mentorship(mentorship_id)

        if not can_transition(actor_id, actor_role, mentorship, GuardAction.VIEW):
            raise NotParticipantError("You are not authorized to view this mentorship")

        return mentorship

    async def get_mentorship_details(
        self,
        mentorship_id: str,
        actor_id: str,
        actor_role: UserRole | str | None = None,
    ) -> MentorshipWithParticipants:
        """Get a mentorship visible to the actor, with both parties attached.

        Profiles are optional; a missing profile is reported as ``None``.

        Raises:
            MentorshipNotFoundError: If the mentorship does not exist.
            NotParticipantError: If the actor is neither participant nor admin.
            ParticipantMissingError: If the mentor or mentee user is gone.
        """
        mentorship = await self.get_mentorship(mentorship_id, actor_id, actor_role)

        mentor = await self.users.find_user_by_id(mentorship.mentor_id)
        mentee = await self.users.find_user_by_id(mentorship.mentee_id)
        if mentor is None or mentee is None:
            logger.warning(
                "Mentorship party missing: id=%s, mentor=%s, mentee=%s",
                mentorship.id,
                mentor is not None,
                mentee is not None,
            )
            raise ParticipantMissingError("User information missing")

        return MentorshipWithParticipants(
            mentorship=mentorship,
            mentor=mentor,
            mentee=mentee,
            mentor_profile=await self.profiles.find_profile_by_user_id(mentor.id),
            mentee_profile=await self.profiles.find_profile_by_user_id(mentee.id),
        )

    async def set_availability(self, user_id: str, available: bool) -> ProfileRecord:
        """Toggle whether the user accepts new mentorship requests.

        Open mentorships are unaffected; only future requests are checked.
        """
        profile = await self.profiles.set_mentorship_availability(user_id, available)

        logger.info("Mentorship availability set: user=%s, available=%s", user_id, available)

        return profile

    async def list_as_mentor(
        self,
        user_id: str,
        status: MentorshipStatus | None = None,
    ) -> list[Mentorship]:
        """List mentorships where the user is the mentor."""
        return await self.mentorships.find_by_mentor(user_id, status)

    async def list_as_mentee(
        self,
        user_id: str,
        status: MentorshipStatus | None = None,
    ) -> list[Mentorship]:
        """List mentorships where the user is the mentee."""
        return await self.mentorships.find_by_mentee(user_id, status)

    async def _get_mentorship(self, mentorship_id: str) -> Mentorship:
        mentorship = await self.mentorships.find_by_id(mentorship_id)
        if mentorship is None:
            raise MentorshipNotFoundError("Mentorship not found")
        return mentorship

    async def _write(self, mentorship: Mentorship, patch: dict[str, Any]) -> Mentorship:
        """Apply a conditional single-row write and return the fresh entity."""
        modified = await self.mentorships.update_one(
            mentorship.id,
            patch,
            expected_version=mentorship.version,
        )
        if modified == 0:
            logger.warning(
                "Mentorship write lost a race: id=%s, version=%d",
                mentorship.id,
                mentorship.version,
            )
            raise ConcurrentModificationError(
                "Mentorship was modified concurrently, please retry"
            )

        return await self._get_mentorship(mentorship.id)
