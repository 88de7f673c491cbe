"""MentorConnect Backend.

Mentorship and event lifecycle services for the MentorConnect platform:
mentorship requests with an explicit status lifecycle, and event
registration with capacity and waitlist handling.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
