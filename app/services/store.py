"""
Facility store – owns the single current ``FacilityState``.

Mutators in ``app.services.booking`` are pure; the store is the one place
that swaps in their result.  ``apply`` holds an ``asyncio.Lock`` across the
check-then-commit so two concurrent requests can never both pass the same
availability check.  One lock covers the whole facility because a user's
credit balance is shared by bookings on every date.

Usage::

    reservation = await store.apply(
        booking.book_court, user_id, day, hour, level, now=store.now()
    )
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any, TypeVar

from app.config import SEED_USERS
from app.errors import BookingError
from app.models import User
from app.services.state import FacilityState

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FacilityStore:
    def __init__(
        self,
        state: FacilityState | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._state = state or FacilityState()
        self._clock = clock
        self._lock = asyncio.Lock()

    @property
    def state(self) -> FacilityState:
        return self._state

    def now(self) -> datetime:
        """Facility-local wall clock time."""
        return self._clock()

    def seed(self, users: Iterable[User]) -> None:
        """Replace all state with a fresh directory of ``users``."""
        self._state = FacilityState.seeded(users)
        self._lock = asyncio.Lock()
        logger.info("Facility state seeded with %d user(s)", len(self._state.users))

    async def apply(
        self,
        mutator: Callable[..., tuple[FacilityState, T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Run ``mutator(state, *args, **kwargs)`` and commit its new state."""
        name = getattr(mutator, "__name__", repr(mutator))
        async with self._lock:
            try:
                new_state, result = mutator(self._state, *args, **kwargs)
            except BookingError as exc:
                logger.info("Rejected %s: %s (%s)", name, exc.code, exc.message)
                raise
            self._state = new_state
        logger.info("Committed %s", name)
        return result


def default_users() -> list[User]:
    return [User(**u) for u in SEED_USERS]


# ── Singleton instance ────────────────────────────────────────────────────
store = FacilityStore()
