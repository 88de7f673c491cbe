# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial MentorConnect schema.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    ]


def upgrade() -> None:
    """Create users, profiles, mentorships and events."""
    # =========================================================================
    # USERS
    # =========================================================================

    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False, server_default=sa.text("''")),
        sa.Column("last_name", sa.String(100), nullable=False, server_default=sa.text("''")),
        sa.Column("role", sa.String(20), nullable=False, server_default=sa.text("'student'")),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "profiles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            unique=True,
            nullable=False,
        ),
        sa.Column(
            "mentorship_available", sa.Boolean, nullable=False, server_default="false"
        ),
        *_timestamps(),
    )

    # =========================================================================
    # MENTORSHIPS
    # =========================================================================

    op.create_table(
        "mentorships",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "mentor_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "mentee_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("request_message", sa.Text, nullable=True),
        sa.Column("goals", postgresql.JSONB, nullable=False, server_default="[]"),
        sa.Column("topics", postgresql.JSONB, nullable=False, server_default="[]"),
        sa.Column("meeting_frequency", sa.String(20), nullable=True),
        sa.Column("meeting_preference", sa.String(20), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("feedback", postgresql.JSONB, nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        *_timestamps(),
        sa.CheckConstraint(
            "mentor_id <> mentee_id", name="ck_mentorships_distinct_parties"
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'active', 'completed', 'declined', 'canceled')",
            name="ck_mentorships_status",
        ),
    )
    op.create_index("ix_mentorships_mentor_id", "mentorships", ["mentor_id"])
    op.create_index("ix_mentorships_mentee_id", "mentorships", ["mentee_id"])
    op.create_index(
        "uq_mentorships_open_pair",
        "mentorships",
        ["mentor_id", "mentee_id"],
        unique=True,
        postgresql_where=sa.text("status IN ('pending', 'active')"),
    )

    # =========================================================================
    # EVENTS
    # =========================================================================

    op.create_table(
        "events",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "organizer_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("registration_deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("capacity", sa.Integer, nullable=True),
        sa.Column("location", postgresql.JSONB, nullable=True),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("tags", postgresql.JSONB, nullable=False, server_default="[]"),
        sa.Column("is_paid", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("price", sa.Float, nullable=True),
        sa.Column("is_public", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("attendees", postgresql.JSONB, nullable=False, server_default="[]"),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'upcoming'")),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('upcoming', 'ongoing', 'completed', 'cancelled')",
            name="ck_events_status",
        ),
        sa.CheckConstraint("capacity IS NULL OR capacity >= 0", name="ck_events_capacity"),
    )
    op.create_index("ix_events_organizer_id", "events", ["organizer_id"])
    op.create_index("ix_events_start_date", "events", ["start_date"])
    op.create_index("ix_events_category", "events", ["category"])
    op.create_index(
        "ix_events_attendees", "events", ["attendees"], postgresql_using="gin"
    )


def downgrade() -> None:
    """Drop all MentorConnect tables."""
    op.drop_table("events")
    op.drop_index("uq_mentorships_open_pair", table_name="mentorships")
    op.drop_table("mentorships")
    op.drop_table("profiles")
    op.drop_table("users")
