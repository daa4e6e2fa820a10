"""
Availability engine – read-only queries over a ``FacilityState``.

Every time window is half-open.  Courts and private courts work in whole
hours on fixed two-hour sessions; practice bays work in minutes with a
variable duration.  Calendar blocks close the whole facility for their
hours, so they apply to every resource.

All functions take ``now`` explicitly so callers (and tests) control the
clock.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from app.config import (
    BAY_COUNT,
    BAY_DURATIONS,
    CLOSE_HOUR,
    COURT_SLOT_HOURS,
    COURT_START_HOURS,
    OPEN_HOUR,
)
from app.models import CalendarBlock, CourtLevel, LevelSignups
from app.services.state import FacilityState


def overlaps(start: int, end: int, other_start: int, other_end: int) -> bool:
    """True if ``[start, end)`` and ``[other_start, other_end)`` share any instant."""
    return not (end <= other_start or start >= other_end)


def slot_datetime(day: date, minutes: int) -> datetime:
    """Local datetime ``minutes`` after midnight on ``day``."""
    return datetime.combine(day, time()) + timedelta(minutes=minutes)


def is_past(day: date, hour: int, now: datetime, minute: int = 0) -> bool:
    return slot_datetime(day, hour * 60 + minute) < now


# ── Blocks ─────────────────────────────────────────────────────────────────


def block_covering(state: FacilityState, day: date, hour: int) -> CalendarBlock | None:
    """First calendar block whose hours include ``hour``, if any."""
    for block in state.blocks_on(day):
        if block.start_hour <= hour < block.end_hour:
            return block
    return None


def is_hour_blocked(state: FacilityState, day: date, hour: int) -> bool:
    return block_covering(state, day, hour) is not None


def is_range_blocked(state: FacilityState, day: date, start_minute: int, end_minute: int) -> bool:
    return any(
        overlaps(start_minute, end_minute, b.start_hour * 60, b.end_hour * 60)
        for b in state.blocks_on(day)
    )


# ── Courts ─────────────────────────────────────────────────────────────────


def _court_window_open(state: FacilityState, day: date, hour: int, now: datetime) -> bool:
    """Checks shared by leveled and private courts: hours, clock, blocks."""
    end = hour + COURT_SLOT_HOURS
    if hour < OPEN_HOUR or end > CLOSE_HOUR:
        return False
    if is_past(day, hour, now):
        return False
    return not any(is_hour_blocked(state, day, h) for h in range(hour, end))


def _court_overlap(hour: int, other_hour: int) -> bool:
    return overlaps(hour, hour + COURT_SLOT_HOURS, other_hour, other_hour + COURT_SLOT_HOURS)


def is_court_slot_available(
    state: FacilityState, day: date, hour: int, now: datetime
) -> bool:
    """Whether a leveled court session starting at ``hour`` can take signups.

    Signups starting at the same hour share one session; a reservation that
    starts at a different hour but overlaps makes the slot unavailable, as
    does any overlapping private-court booking.
    """
    if hour not in COURT_START_HOURS:
        return False
    if not _court_window_open(state, day, hour, now):
        return False
    for res in state.courts_on(day):
        if res.hour != hour and _court_overlap(hour, res.hour):
            return False
    return not any(_court_overlap(hour, res.hour) for res in state.private_courts_on(day))


def signups_for_slot(state: FacilityState, day: date, hour: int) -> LevelSignups:
    """User ids per level whose two-hour session covers ``hour``."""
    roster: dict[str, list[str]] = {level.value: [] for level in CourtLevel}
    for res in state.courts_on(day):
        if res.hour <= hour < res.hour + COURT_SLOT_HOURS:
            roster[res.court_type.value].append(res.user_id)
    return LevelSignups(**roster)


def user_court_signup(state: FacilityState, day: date, hour: int, user_id: str) -> bool:
    """Whether the user already holds a court session overlapping ``[hour, hour + 2)``."""
    return any(
        res.user_id == user_id and _court_overlap(hour, res.hour)
        for res in state.courts_on(day)
    )


# ── Private courts ─────────────────────────────────────────────────────────


def is_private_court_slot_available(
    state: FacilityState, day: date, hour: int, now: datetime
) -> bool:
    if hour not in COURT_START_HOURS:
        return False
    if not _court_window_open(state, day, hour, now):
        return False
    if any(_court_overlap(hour, res.hour) for res in state.courts_on(day)):
        return False
    return not any(_court_overlap(hour, res.hour) for res in state.private_courts_on(day))


# ── Bays ───────────────────────────────────────────────────────────────────


def is_bay_slot_available(
    state: FacilityState,
    day: date,
    hour: int,
    minute: int,
    duration: int,
    bay_number: int,
    now: datetime,
) -> bool:
    """Whether ``bay_number`` is free for ``duration`` minutes from ``hour:minute``."""
    if duration not in BAY_DURATIONS or not 1 <= bay_number <= BAY_COUNT:
        return False

    start = hour * 60 + minute
    end = start + duration
    if start < OPEN_HOUR * 60 or end > CLOSE_HOUR * 60:
        return False
    if slot_datetime(day, end) <= now:
        return False
    if is_range_blocked(state, day, start, end):
        return False

    return not any(
        overlaps(start, end, res.start, res.end) for res in state.bays_on(day, bay_number)
    )


def available_bays_for_slot(
    state: FacilityState,
    day: date,
    hour: int,
    minute: int,
    duration: int,
    now: datetime,
) -> list[int]:
    return [
        n
        for n in range(1, BAY_COUNT + 1)
        if is_bay_slot_available(state, day, hour, minute, duration, n, now)
    ]


def user_bay_overlap(
    state: FacilityState, day: date, start: int, end: int, user_id: str
) -> bool:
    """Whether the user already holds any bay during ``[start, end)`` minutes."""
    return any(
        res.user_id == user_id and overlaps(start, end, res.start, res.end)
        for res in state.bays_on(day)
    )
