# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for migration ordering and rendered schema SQL."""

import importlib
import io

import pytest
from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext

from mentorconnect.infrastructure.database.migrations.runner import (
    MIGRATIONS,
    get_pending_migrations,
)

_VERSIONS_PACKAGE = "mentorconnect.infrastructure.database.migrations.versions"


def render_upgrade_sql(revision: str) -> str:
    """Render a revision's upgrade() as offline PostgreSQL DDL."""
    module = importlib.import_module(f"{_VERSIONS_PACKAGE}.{revision}")
    buffer = io.StringIO()
    context = MigrationContext.configure(
        dialect_name="postgresql",
        opts={"as_sql": True, "output_buffer": buffer},
    )
    with Operations.context(context):
        module.upgrade()
    return buffer.getvalue()


class TestPendingMigrations:
    def test_fresh_database_gets_everything(self) -> None:
        assert get_pending_migrations(None) == MIGRATIONS

    def test_latest_version_has_nothing_pending(self) -> None:
        assert get_pending_migrations(MIGRATIONS[-1]) == []

    def test_target_stops_the_range(self) -> None:
        assert get_pending_migrations(None, MIGRATIONS[0]) == MIGRATIONS[:1]

    def test_unknown_current_version(self) -> None:
        assert get_pending_migrations("999_from_the_future") == []

    def test_unknown_target(self) -> None:
        assert get_pending_migrations(None, "999_from_the_future") == []


def test_every_revision_has_upgrade_and_downgrade() -> None:
    for revision in MIGRATIONS:
        module = importlib.import_module(f"{_VERSIONS_PACKAGE}.{revision}")
        assert callable(module.upgrade)
        assert callable(module.downgrade)


class TestInitialSchemaDDL:
    """Server defaults must satisfy the status check constraints."""

    @pytest.fixture(scope="class")
    def ddl(self) -> str:
        return render_upgrade_sql("001_initial_schema")

    @pytest.mark.parametrize(
        "default",
        [
            "DEFAULT 'pending'",
            "DEFAULT 'upcoming'",
            "DEFAULT 'student'",
            "DEFAULT ''",
        ],
    )
    def test_string_defaults_are_plain_literals(self, ddl: str, default: str) -> None:
        assert default in ddl

    def test_no_doubly_quoted_defaults(self, ddl: str) -> None:
        assert "'''" not in ddl

    def test_open_pair_index_is_partial(self, ddl: str) -> None:
        assert "CREATE UNIQUE INDEX uq_mentorships_open_pair" in ddl
        assert "WHERE status IN ('pending', 'active')" in ddl
