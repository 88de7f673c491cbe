# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event table.

Attendees are stored inline as an ordered JSON list so that registering
and cancelling stay single-row writes guarded by ``version``.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from mentorconnect.infrastructure.database.models.base import Base, IdMixin, TimestampMixin


class EventRow(Base, IdMixin, TimestampMixin):
    __tablename__ = "events"

    organizer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    registration_deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    capacity: Mapped[int | None] = mapped_column(Integer)
    location: Mapped[dict | None] = mapped_column(JSONB)
    image_url: Mapped[str | None] = mapped_column(String(500))
    category: Mapped[str | None] = mapped_column(String(100), index=True)
    tags: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    is_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    price: Mapped[float | None] = mapped_column(Float)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    # [{"user_id", "registration_date", "has_paid", "status"}, ...]
    attendees: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    # upcoming / ongoing / completed / cancelled
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="upcoming")
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
