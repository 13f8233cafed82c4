"""
Shared pytest fixtures for showcase tests.

This module provides:
- An in-memory SQLite engine shared by every session of one test
- A ``StaticProbe`` whose availability a test can flip
- The composed access layer and a FastAPI ``TestClient`` on top of it
- An administrator account and its bearer token
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from showcase.api import create_app
from showcase.api.settings import ShowcaseAPISettings
from showcase.core.access import ContentAccess, build_access
from showcase.core.orm import create_showcase_engine
from showcase.core.probe import StaticProbe
from showcase.core.security import create_access_token
from showcase.ops.auth import create_admin


@pytest.fixture()
def settings() -> ShowcaseAPISettings:
    return ShowcaseAPISettings(
        database_url="sqlite:///:memory:",
        jwt_secret="test-secret-0123456789abcdef0123456789",
        heartbeat_seconds=0,
        log_level="WARNING",
        log_json=True,
    )


@pytest.fixture()
def engine() -> Iterator[Engine]:
    eng = create_showcase_engine("sqlite:///:memory:")
    yield eng
    eng.dispose()


@pytest.fixture()
def probe() -> StaticProbe:
    return StaticProbe(available=True)


@pytest.fixture()
def access(settings, engine, probe) -> ContentAccess:
    acc = build_access(settings, engine=engine, probe=probe)
    acc.create_tables()
    return acc


@pytest.fixture()
def app(settings, engine, probe):
    return create_app(settings, engine=engine, probe=probe)


@pytest.fixture()
def client(app) -> Iterator[TestClient]:
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture()
def app_access(app) -> ContentAccess:
    """The access layer the app under test is using."""
    return app.state.access


@pytest.fixture()
def admin(client, app_access):
    return create_admin(
        app_access,
        username="site-admin",
        email="admin@example.com",
        password="correct-horse",
    )


@pytest.fixture()
def admin_headers(admin, settings) -> dict[str, str]:
    token = create_access_token(
        admin.id,
        secret=settings.jwt_secret,
        role=admin.role,
        algorithm=settings.jwt_algorithm,
    )
    return {"Authorization": f"Bearer {token}"}
