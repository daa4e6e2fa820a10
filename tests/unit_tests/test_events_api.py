"""Tests for the /api/events endpoints."""

import uuid

from tests.mocks.models import (
    DAY,
    MOCK_ADMIN,
    MOCK_BROKE_MEMBER,
    MOCK_MEMBER,
    NEXT_DAY,
    PREVIOUS_DAY,
)

EVENT = {
    "date": DAY.isoformat(),
    "hour": 10,
    "title": "Ladder night",
    "description": "Round robin for intermediate players",
}


def _create(client, login_as, **overrides):
    login_as(MOCK_ADMIN)
    resp = client.post("/api/events", json={**EVENT, **overrides})
    assert resp.status_code == 201
    login_as(MOCK_MEMBER)
    return resp.json()


class TestCreateEvent:
    def test_admin_creates_event_with_defaults(self, client, login_as):
        event = _create(client, login_as)
        assert event["duration"] == 2
        assert event["max_participants"] == 12
        assert event["credits_required"] == 2
        assert event["participants"] == []

    def test_member_cannot_create_event(self, client):
        resp = client.post("/api/events", json=EVENT)
        assert resp.status_code == 403

    def test_event_in_the_past(self, client, login_as):
        login_as(MOCK_ADMIN)
        resp = client.post("/api/events", json={**EVENT, "date": PREVIOUS_DAY.isoformat()})
        assert resp.status_code == 400
        assert resp.json()["error"] == "past_time"

    def test_event_past_closing(self, client, login_as):
        login_as(MOCK_ADMIN)
        resp = client.post("/api/events", json={**EVENT, "hour": 19, "duration": 2})
        assert resp.status_code == 400
        assert resp.json()["error"] == "validation_error"


class TestListEvents:
    def test_list_is_sorted_and_paginated(self, client, login_as):
        _create(client, login_as, date=NEXT_DAY.isoformat())
        _create(client, login_as, hour=14)
        _create(client, login_as, hour=8)

        resp = client.get("/api/events", params={"page": 1, "page_size": 2})
        assert resp.status_code == 200
        data = resp.json()
        assert [e["hour"] for e in data["items"]] == [8, 14]
        assert data["meta"]["total_items"] == 3
        assert data["meta"]["total_pages"] == 2

    def test_date_range_filter(self, client, login_as):
        _create(client, login_as)
        _create(client, login_as, date=NEXT_DAY.isoformat())

        resp = client.get("/api/events", params={"date_from": NEXT_DAY.isoformat()})
        items = resp.json()["items"]
        assert len(items) == 1
        assert items[0]["date"] == NEXT_DAY.isoformat()

    def test_get_event(self, client, login_as):
        event = _create(client, login_as)

        resp = client.get(f"/api/events/{event['id']}")
        assert resp.status_code == 200
        assert resp.json()["title"] == "Ladder night"

    def test_get_unknown_event(self, client):
        resp = client.get(f"/api/events/{uuid.uuid4()}")
        assert resp.status_code == 404
        assert resp.json()["error"] == "not_found"


class TestJoinEvent:
    def test_join_charges_credits(self, client, login_as):
        event = _create(client, login_as)

        resp = client.post(f"/api/events/{event['id']}/join")
        assert resp.status_code == 200
        data = resp.json()
        assert data["event"]["participants"] == ["member-1"]
        assert data["credits_remaining"] == 8

    def test_join_twice(self, client, login_as):
        event = _create(client, login_as)
        client.post(f"/api/events/{event['id']}/join")

        resp = client.post(f"/api/events/{event['id']}/join")
        assert resp.status_code == 409
        assert resp.json()["error"] == "already_registered"

    def test_join_full_event(self, client, login_as):
        event = _create(client, login_as, max_participants=1)
        client.post(f"/api/events/{event['id']}/join")

        login_as(MOCK_ADMIN)
        resp = client.post(f"/api/events/{event['id']}/join")
        assert resp.status_code == 409
        assert resp.json()["error"] == "capacity_full"

    def test_join_without_credits(self, client, login_as):
        event = _create(client, login_as)

        login_as(MOCK_BROKE_MEMBER)
        resp = client.post(f"/api/events/{event['id']}/join")
        assert resp.status_code == 402

    def test_joined_event_shows_in_my_sessions(self, client, login_as):
        event = _create(client, login_as)
        client.post(f"/api/events/{event['id']}/join")

        resp = client.get("/api/bookings/mine")
        assert [e["id"] for e in resp.json()["group_events"]] == [event["id"]]
