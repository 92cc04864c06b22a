"""
tests/conftest.py -- Shared test fixtures for the portal API.

This module provides:
  - users / sessions / auth: fresh in-memory auth components for unit tests
  - client: TestClient over the real app, with a fresh lifespan (new stores,
    re-seeded admin) per test
  - admin_client / user_client: the same, already logged in via POST /api/login
  - login(): helper that posts credentials and asserts success

DEBUG must be set before any core/auth import so get_settings() accepts the
development admin password instead of raising ValueError. SCRYPT_N is
lowered so the suite doesn't spend most of its time in the KDF.
"""

from __future__ import annotations

import os
from collections.abc import Generator

# CRITICAL: set before any core/auth import -- settings are read at import time.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SCRYPT_N", "1024")

import pytest
from fastapi.testclient import TestClient

from api.limiter import limiter
from api.main import app
from auth.service import AuthService
from auth.sessions import SessionStore
from auth.store import UserStore

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"  # development default from core/config.py


# ---------------------------------------------------------------------------
# Unit fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def users() -> UserStore:
    return UserStore()


@pytest.fixture
def sessions() -> SessionStore:
    return SessionStore(ttl=3600)


@pytest.fixture
def auth(users: UserStore, sessions: SessionStore) -> AuthService:
    return AuthService(users, sessions)


# ---------------------------------------------------------------------------
# Integration fixtures
# ---------------------------------------------------------------------------


def login(client: TestClient, username: str, password: str) -> dict:
    """POST /api/login and return the user body. The client keeps the cookie."""
    resp = client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200, f"login failed: {resp.status_code} {resp.text}"
    return resp.json()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """TestClient running the real lifespan, so every test gets fresh stores.

    base_url uses localhost because TrustedHostMiddleware rejects the
    TestClient default host ("testserver"). The limiter is reset so login
    counts don't leak between tests.
    """
    limiter.reset()
    with TestClient(app, base_url="http://localhost", raise_server_exceptions=True) as c:
        yield c


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    login(client, ADMIN_USERNAME, ADMIN_PASSWORD)
    return client


@pytest.fixture
def user_client(client: TestClient) -> TestClient:
    """Client logged in as a freshly registered role "user" account (alice)."""
    resp = client.post(
        "/api/register",
        json={"username": "alice", "password": "secret1", "email": "a@x.com"},
    )
    assert resp.status_code == 201, resp.text
    login(client, "alice", "secret1")
    return client


@pytest.fixture
def login_as():
    """Expose login() to test modules without importing conftest directly."""
    return login
