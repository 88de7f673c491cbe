# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authorization domain package.

Provides the pure authorization guard shared by the mentorship and
event lifecycle services.
"""

from mentorconnect.domains.authorization.guard import (
    GuardAction,
    action_for_status,
    can_transition,
    is_admin,
)

__all__ = [
    "GuardAction",
    "action_for_status",
    "can_transition",
    "is_admin",
]
