"""A member's own bookings and joined group events ("My Sessions")."""

from __future__ import annotations

from app.models import MySessions
from app.services.state import FacilityState


def sessions_for_user(state: FacilityState, user_id: str) -> MySessions:
    return MySessions(
        court_reservations=sorted(
            (r for r in state.court_reservations if r.user_id == user_id),
            key=lambda r: (r.date, r.hour),
        ),
        bay_reservations=sorted(
            (r for r in state.bay_reservations if r.user_id == user_id),
            key=lambda r: (r.date, r.start),
        ),
        private_court_reservations=sorted(
            (r for r in state.private_court_reservations if r.user_id == user_id),
            key=lambda r: (r.date, r.hour),
        ),
        group_events=sorted(
            (e for e in state.events if user_id in e.participants),
            key=lambda e: (e.date, e.hour),
        ),
    )
