"""Tests for the /api/bookings endpoints."""

from tests.mocks.models import (
    DAY,
    MOCK_ADMIN,
    MOCK_BROKE_MEMBER,
    MOCK_MEMBER,
    PREVIOUS_DAY,
)

COURT = {"resource": "court", "date": DAY.isoformat(), "hour": 8, "level": "beginner"}
BAY = {
    "resource": "bay",
    "date": DAY.isoformat(),
    "start_hour": 9,
    "start_minute": 0,
    "duration": 60,
    "bay_number": 1,
}
PRIVATE = {"resource": "private-court", "date": DAY.isoformat(), "hour": 10}


class TestCourtBookings:
    def test_book_court(self, client):
        resp = client.post("/api/bookings", json=COURT)
        assert resp.status_code == 201
        data = resp.json()
        assert data["resource"] == "court"
        assert data["reservation"]["hour"] == 8
        assert data["reservation"]["court_type"] == "beginner"
        assert data["reservation"]["user_id"] == "member-1"
        assert data["credits_remaining"] == 9

    def test_overlapping_start_hour_is_unavailable(self, client):
        client.post("/api/bookings", json=COURT)

        resp = client.post("/api/bookings", json={**COURT, "hour": 9})
        assert resp.status_code == 409
        assert resp.json()["error"] == "slot_unavailable"

    def test_off_grid_start_hour_is_rejected(self, client, facility):
        resp = client.post("/api/bookings", json={**COURT, "hour": 11})
        assert resp.status_code == 409
        assert resp.json()["error"] == "slot_unavailable"
        assert facility.state.court_reservations == ()

        grid = client.get("/api/availability", params={"date": DAY.isoformat()}).json()
        assert all(s["available"] for s in grid["slots"])

    def test_double_signup_is_rejected(self, client):
        client.post("/api/bookings", json=COURT)

        resp = client.post("/api/bookings", json={**COURT, "level": "advanced"})
        assert resp.status_code == 409
        assert resp.json()["error"] == "already_booked"

    def test_past_slot_is_rejected(self, client):
        resp = client.post("/api/bookings", json={**COURT, "date": PREVIOUS_DAY.isoformat()})
        assert resp.status_code == 400
        assert resp.json()["error"] == "past_time"

    def test_insufficient_credits(self, client, login_as):
        login_as(MOCK_BROKE_MEMBER)

        resp = client.post("/api/bookings", json=COURT)
        assert resp.status_code == 402
        body = resp.json()
        assert body["error"] == "insufficient_credits"
        assert body["details"]["required"] == 1
        assert body["details"]["available"] == 0

    def test_unknown_level_is_invalid(self, client):
        resp = client.post("/api/bookings", json={**COURT, "level": "expert"})
        assert resp.status_code == 422


class TestBayBookings:
    def test_book_bay(self, client):
        resp = client.post("/api/bookings", json=BAY)
        assert resp.status_code == 201
        data = resp.json()
        assert data["resource"] == "bay"
        assert data["reservation"]["bay_number"] == 1
        assert data["reservation"]["duration"] == 60
        assert data["credits_remaining"] == 9

    def test_same_bay_overlap_is_unavailable(self, client):
        client.post("/api/bookings", json=BAY)

        resp = client.post("/api/bookings", json={**BAY, "start_minute": 30, "duration": 30})
        assert resp.status_code == 409
        assert resp.json()["error"] == "slot_unavailable"

    def test_other_bay_is_free_for_another_member(self, client, login_as):
        client.post("/api/bookings", json=BAY)

        login_as(MOCK_ADMIN)
        resp = client.post("/api/bookings", json={**BAY, "bay_number": 2, "user_id": "member-2"})
        assert resp.status_code == 201
        assert resp.json()["reservation"]["user_id"] == "member-2"

    def test_own_overlap_on_other_bay_is_rejected(self, client):
        client.post("/api/bookings", json=BAY)

        resp = client.post("/api/bookings", json={**BAY, "bay_number": 2})
        assert resp.status_code == 409
        assert resp.json()["error"] == "already_booked"

    def test_unsupported_duration_is_invalid(self, client):
        resp = client.post("/api/bookings", json={**BAY, "duration": 45})
        assert resp.status_code == 422

    def test_unknown_bay_is_invalid(self, client):
        resp = client.post("/api/bookings", json={**BAY, "bay_number": 3})
        assert resp.status_code == 422


class TestPrivateCourtBookings:
    def test_book_private_court(self, client):
        resp = client.post("/api/bookings", json=PRIVATE)
        assert resp.status_code == 201
        data = resp.json()
        assert data["resource"] == "private-court"
        assert data["reservation"]["hour"] == 10
        assert data["credits_remaining"] == 6

    def test_court_signup_blocks_private_court(self, client):
        client.post("/api/bookings", json={**COURT, "hour": 10})

        resp = client.post("/api/bookings", json=PRIVATE)
        assert resp.status_code == 409

    def test_odd_hour_is_unavailable(self, client):
        resp = client.post("/api/bookings", json={**PRIVATE, "hour": 11})
        assert resp.status_code == 409
        assert resp.json()["error"] == "slot_unavailable"


class TestBookingOnBehalf:
    def test_admin_books_for_member(self, client, login_as, facility):
        login_as(MOCK_ADMIN)

        resp = client.post("/api/bookings", json={**COURT, "user_id": "member-2"})
        assert resp.status_code == 201
        data = resp.json()
        assert data["reservation"]["user_id"] == "member-2"
        assert data["credits_remaining"] == 9
        assert facility.state.get_user("admin-1").credits == 999

    def test_member_cannot_book_for_someone_else(self, client):
        resp = client.post("/api/bookings", json={**COURT, "user_id": "member-2"})
        assert resp.status_code == 403
        assert resp.json()["error"] == "unauthorized"

    def test_admin_booking_for_unknown_user(self, client, login_as):
        login_as(MOCK_ADMIN)

        resp = client.post("/api/bookings", json={**COURT, "user_id": "nobody"})
        assert resp.status_code == 404


class TestBookingRequests:
    def test_unknown_resource_is_invalid(self, client):
        resp = client.post("/api/bookings", json={**COURT, "resource": "squash"})
        assert resp.status_code == 422

    def test_missing_field_is_invalid(self, client):
        resp = client.post("/api/bookings", json={"resource": "court", "date": DAY.isoformat()})
        assert resp.status_code == 422

    def test_unauthenticated(self, unauthed_client):
        resp = unauthed_client.post("/api/bookings", json=COURT)
        assert resp.status_code == 401


class TestMySessions:
    def test_lists_own_bookings(self, client):
        client.post("/api/bookings", json=COURT)
        client.post("/api/bookings", json=BAY)
        client.post("/api/bookings", json={**PRIVATE, "hour": 14})

        resp = client.get("/api/bookings/mine")
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["court_reservations"]) == 1
        assert len(data["bay_reservations"]) == 1
        assert len(data["private_court_reservations"]) == 1
        assert data["group_events"] == []

    def test_other_members_bookings_are_not_listed(self, client, login_as):
        login_as(MOCK_ADMIN)
        client.post("/api/bookings", json={**COURT, "user_id": "member-2"})

        login_as(MOCK_MEMBER)
        resp = client.get("/api/bookings/mine")
        assert resp.json()["court_reservations"] == []
