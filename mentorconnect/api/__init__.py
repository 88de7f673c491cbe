# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""HTTP API for MentorConnect.

Example:
    uvicorn --factory mentorconnect.api.app:create_app --port 5000
"""
