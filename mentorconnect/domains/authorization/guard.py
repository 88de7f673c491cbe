# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authorization guard for lifecycle actions.

The guard is a pure function of the actor and the entity's relationship
fields (``mentor_id``/``mentee_id`` for mentorships, ``organizer_id`` for
events). It holds no state and never touches persistence.

Rules:
    - accept / decline: mentor
    - cancel: mentee
    - complete / view: mentor or mentee
    - submit_feedback: mentor or mentee (no admin override, the slot
      written depends on the participant's role)
    - event update / delete: organizer
    - admin may perform every other action an owner could
"""

import logging
from enum import Enum

from mentorconnect.models.common import UserRole
from mentorconnect.models.event import Event
from mentorconnect.models.mentorship import Mentorship, MentorshipStatus

logger = logging.getLogger(__name__)


class GuardAction(str, Enum):
    """Actions the guard can be asked about."""

    ACCEPT = "accept"
    DECLINE = "decline"
    CANCEL = "cancel"
    COMPLETE = "complete"
    VIEW = "view"
    SUBMIT_FEEDBACK = "submit_feedback"
    UPDATE_EVENT = "update_event"
    DELETE_EVENT = "delete_event"


_STATUS_ACTIONS = {
    MentorshipStatus.ACTIVE: GuardAction.ACCEPT,
    MentorshipStatus.DECLINED: GuardAction.DECLINE,
    MentorshipStatus.CANCELED: GuardAction.CANCEL,
    MentorshipStatus.COMPLETED: GuardAction.COMPLETE,
}

_MENTORSHIP_ACTIONS = frozenset({
    GuardAction.ACCEPT,
    GuardAction.DECLINE,
    GuardAction.CANCEL,
    GuardAction.COMPLETE,
    GuardAction.VIEW,
    GuardAction.SUBMIT_FEEDBACK,
})

_EVENT_ACTIONS = frozenset({GuardAction.UPDATE_EVENT, GuardAction.DELETE_EVENT})

_NO_ADMIN_OVERRIDE = frozenset({GuardAction.SUBMIT_FEEDBACK})


def action_for_status(new_status: MentorshipStatus) -> GuardAction | None:
    """Map a target mentorship status to the guard action that reaches it.

    Args:
        new_status: Requested mentorship status.

    Returns:
        The guard action, or None for statuses no transition leads to
        (``pending`` is only ever entered by creation).
    """
    return _STATUS_ACTIONS.get(MentorshipStatus(new_status))


def is_admin(actor_role: UserRole | str | None) -> bool:
    """Check whether a role carries the global admin override."""
    if isinstance(actor_role, UserRole):
        return actor_role == UserRole.ADMIN
    return actor_role == UserRole.ADMIN.value


def can_transition(
    actor_id: str,
    actor_role: UserRole | str | None,
    entity: Mentorship | Event,
    action: GuardAction | str,
) -> bool:
    """Decide whether an actor may perform an action on an entity.

    Args:
        actor_id: Identifier of the authenticated caller.
        actor_role: Caller's platform role; None is treated as non-admin.
        entity: Mentorship or event being acted upon.
        action: Requested action.

    Returns:
        True if the action is permitted.
    """
    action = GuardAction(action)

    if isinstance(entity, Mentorship):
        if action not in _MENTORSHIP_ACTIONS:
            return False
        allowed = _mentorship_owner_allows(actor_id, entity, action)
    elif isinstance(entity, Event):
        if action not in _EVENT_ACTIONS:
            return False
        allowed = entity.organizer_id == actor_id
    else:
        return False

    if not allowed and action not in _NO_ADMIN_OVERRIDE and is_admin(actor_role):
        logger.debug("Admin override: actor=%s, action=%s", actor_id, action.value)
        return True

    return allowed


def _mentorship_owner_allows(
    actor_id: str,
    mentorship: Mentorship,
    action: GuardAction,
) -> bool:
    if action in (GuardAction.ACCEPT, GuardAction.DECLINE):
        return mentorship.mentor_id == actor_id
    if action == GuardAction.CANCEL:
        return mentorship.mentee_id == actor_id
    # complete, view, submit_feedback
    return mentorship.is_participant(actor_id)
