# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fixtures for API tests.

The app under test has the real routers, middleware and exception
handlers; only the service dependencies are overridden so they run
against the in-memory repositories.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import SecretStr

from mentorconnect.api.dependencies import get_event_service, get_mentorship_service
from mentorconnect.api.errors import register_exception_handlers
from mentorconnect.api.middleware.auth import AuthMiddleware
from mentorconnect.api.routes import health
from mentorconnect.api.v1 import router as v1_router
from mentorconnect.core.config import JWTSettings
from mentorconnect.domains.auth.jwt import JWTManager
from tests.fakes import ADMIN_ID, MENTEE_ID, MENTOR_ID, OUTSIDER_ID


@pytest.fixture
def jwt_manager() -> JWTManager:
    return JWTManager(JWTSettings(secret_key=SecretStr("api-test-secret")))


@pytest.fixture
def app(jwt_manager, mentorship_service, event_service) -> FastAPI:
    """Create test FastAPI app."""
    app = FastAPI()
    register_exception_handlers(app)
    app.add_middleware(AuthMiddleware, jwt_manager=jwt_manager)
    app.include_router(health.router)
    app.include_router(v1_router)

    app.dependency_overrides[get_mentorship_service] = lambda: mentorship_service
    app.dependency_overrides[get_event_service] = lambda: event_service
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Create test client."""
    return TestClient(app)


def _headers(jwt_manager: JWTManager, user_id: str, role: str) -> dict[str, str]:
    token = jwt_manager.create_access_token(user_id=user_id, role=role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def mentor_headers(jwt_manager) -> dict[str, str]:
    return _headers(jwt_manager, MENTOR_ID, "alumni")


@pytest.fixture
def mentee_headers(jwt_manager) -> dict[str, str]:
    return _headers(jwt_manager, MENTEE_ID, "student")


@pytest.fixture
def admin_headers(jwt_manager) -> dict[str, str]:
    return _headers(jwt_manager, ADMIN_ID, "admin")


@pytest.fixture
def outsider_headers(jwt_manager) -> dict[str, str]:
    return _headers(jwt_manager, OUTSIDER_ID, "student")
