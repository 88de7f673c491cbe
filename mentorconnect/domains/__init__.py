# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for MentorConnect.

This package contains domain services that encapsulate business logic.
Services receive repositories through their constructors and never touch
the database session directly.

Domains:
    authorization: Pure guard deciding who may perform which action.
    mentorship: Mentorship request and status lifecycle.
    event: Event registration, capacity and waitlist.
"""
