"""
Shared test fixtures.

Provides a FastAPI TestClient wired to:
  • a freshly seeded facility store pinned to a fixed clock
  • an empty OTP store
  • rate limiting disabled

The `client` fixture signs requests in as MOCK_MEMBER; use `login_as`
to switch the acting user (e.g. to MOCK_ADMIN) inside a test.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_current_user
from app.main import app
from app.models import User
from app.services.otp import otp_store
from app.services.store import FacilityStore, store
from tests.mocks.models import FIXED_NOW, MOCK_MEMBER, MOCK_USERS


# ── Fixtures ───────────────────────────────────────────────────────────────


@pytest.fixture()
def facility(monkeypatch) -> FacilityStore:
    """
    The application's store, reseeded with the mock users and pinned to
    FIXED_NOW for the duration of the test.
    """
    store.seed(MOCK_USERS)
    monkeypatch.setattr(store, "_clock", lambda: FIXED_NOW)
    otp_store.clear()

    # ── Disable rate limiting in tests ────────────────────────────────
    from app.rate_limit import limiter as _limiter
    monkeypatch.setattr(_limiter, "enabled", False)

    return store


@pytest.fixture()
def login_as() -> Callable[[User], None]:
    """Switch the user that authenticated requests run as."""

    def _login(user: User) -> None:
        async def _mock_current_user():
            return user

        app.dependency_overrides[get_current_user] = _mock_current_user

    return _login


@pytest.fixture()
def client(facility: FacilityStore, login_as) -> TestClient:
    """
    FastAPI TestClient with a fresh store and auth bypassed (MOCK_MEMBER).

    Uses a context manager so the lifespan runs.
    """
    login_as(MOCK_MEMBER)

    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc

    app.dependency_overrides.clear()


@pytest.fixture()
def unauthed_client(facility: FacilityStore) -> TestClient:
    """
    TestClient without auth overrides - requests are rejected unless
    a session cookie is provided.
    """
    app.dependency_overrides.clear()

    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc

    app.dependency_overrides.clear()
