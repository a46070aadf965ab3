"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from erpadmin.api.main import app
from erpadmin.core.config import Settings, get_settings


@pytest.fixture
def settings():
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def make_client():
    """Factory for a TestClient running with specific settings overrides."""
    clients = []

    def _make(**overrides) -> TestClient:
        test_settings = Settings(_env_file=None, **overrides)
        app.dependency_overrides[get_settings] = lambda: test_settings
        test_client = TestClient(app)
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in clients:
        test_client.close()
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client):
    """TestClient with default settings."""
    return make_client()


@pytest.fixture
def as_role():
    """Identity headers the auth proxy would send for a role."""

    def _headers(role: str, user_id: str = "u-1", email: str = "user@example.com") -> dict:
        return {
            "X-User-Role": role,
            "X-User-Id": user_id,
            "X-User-Email": email,
        }

    return _headers
