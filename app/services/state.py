"""
Immutable snapshot of everything the facility knows during a session.

Reservations live in three separately typed, append-only tuples.  A new
snapshot is produced for every committed change (see ``app.services.booking``)
so a rejected command can never leave a half-applied state behind.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import date

from app.errors import NotFound
from app.models import (
    BayReservation,
    CalendarBlock,
    CourtReservation,
    GroupTrainingEvent,
    PrivateCourtReservation,
    User,
)


@dataclass(frozen=True)
class FacilityState:
    users: Mapping[str, User] = field(default_factory=dict)
    court_reservations: tuple[CourtReservation, ...] = ()
    bay_reservations: tuple[BayReservation, ...] = ()
    private_court_reservations: tuple[PrivateCourtReservation, ...] = ()
    blocks: tuple[CalendarBlock, ...] = ()
    events: tuple[GroupTrainingEvent, ...] = ()

    @classmethod
    def seeded(cls, users: Iterable[User]) -> FacilityState:
        return cls(users={u.id: u for u in users})

    # ── Users ──────────────────────────────────────────────────────────

    def get_user(self, user_id: str) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise NotFound(f"User {user_id} not found", user_id=user_id)
        return user

    def find_user_by_email(self, email: str) -> User | None:
        email = email.lower()
        for user in self.users.values():
            if user.email.lower() == email:
                return user
        return None

    def with_user(self, user: User) -> FacilityState:
        return replace(self, users={**self.users, user.id: user})

    # ── Per-day views ──────────────────────────────────────────────────

    def courts_on(self, day: date) -> list[CourtReservation]:
        return [r for r in self.court_reservations if r.date == day]

    def bays_on(self, day: date, bay_number: int | None = None) -> list[BayReservation]:
        return [
            r
            for r in self.bay_reservations
            if r.date == day and (bay_number is None or r.bay_number == bay_number)
        ]

    def private_courts_on(self, day: date) -> list[PrivateCourtReservation]:
        return [r for r in self.private_court_reservations if r.date == day]

    def blocks_on(self, day: date) -> list[CalendarBlock]:
        return [b for b in self.blocks if b.date == day]

    def get_event(self, event_id) -> GroupTrainingEvent:
        for event in self.events:
            if str(event.id) == str(event_id):
                return event
        raise NotFound(f"Event {event_id} not found", event_id=str(event_id))
