"""Rate limits on the sign-in endpoints."""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.rate_limit import limiter


@pytest.fixture()
def limited_client(facility):
    """Unauthenticated client with the limiter switched back on and emptied."""
    limiter.enabled = True
    limiter.reset()

    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc

    limiter.enabled = False


def _request_otp(tc, email="someone@example.com"):
    return tc.post("/api/auth/request-otp", json={"email": email})


def _verify(tc, code="000000"):
    return tc.post("/api/auth/verify-otp", json={"email": "someone@example.com", "otp_code": code})


def test_sixth_otp_request_in_a_minute_is_refused(limited_client):
    statuses = [_request_otp(limited_client).status_code for _ in range(6)]
    assert statuses == [200] * 5 + [429]


def test_limit_applies_per_client_not_per_email(limited_client):
    for n in range(5):
        assert _request_otp(limited_client, f"player{n}@example.com").status_code == 200

    resp = _request_otp(limited_client, "fresh@example.com")
    assert resp.status_code == 429
    assert resp.json()["detail"].startswith("Rate limit exceeded")


def test_wrong_codes_are_limited_after_ten_attempts(limited_client):
    statuses = [_verify(limited_client).status_code for _ in range(11)]
    assert statuses[:10] == [401] * 10
    assert statuses[10] == 429


def test_limited_client_can_still_read_availability(limited_client):
    for _ in range(6):
        _request_otp(limited_client)

    resp = limited_client.get("/api/availability")
    assert resp.status_code == 200
    assert resp.json()["resource"] == "court"
