# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic models for entities and API payloads.

Modules:
    common: Base entity, roles and shared response bodies.
    user: User and profile records.
    mentorship: Mentorship entity, statuses and payloads.
    event: Event entity, attendees and payloads.
"""
