"""
Day grids for the availability endpoint.

Builds one ``SlotAvailability`` row per bookable start time for a single
resource, using the predicates in ``app.services.availability``.
"""

from __future__ import annotations

from datetime import date, datetime

from app.config import CLOSE_HOUR, COURT_SLOT_HOURS, COURT_START_HOURS, OPEN_HOUR
from app.models import AvailabilityResponse, Resource, SlotAvailability
from app.services import availability
from app.services.state import FacilityState


def _blocked_reason(state: FacilityState, day: date, start_hour: int, end_hour: int) -> str | None:
    for hour in range(start_hour, end_hour):
        block = availability.block_covering(state, day, hour)
        if block is not None:
            return block.reason
    return None


def court_grid(state: FacilityState, day: date, now: datetime) -> list[SlotAvailability]:
    rows = []
    for hour in COURT_START_HOURS:
        signups = availability.signups_for_slot(state, day, hour)
        rows.append(
            SlotAvailability(
                start_hour=hour,
                end_hour=hour + COURT_SLOT_HOURS,
                available=availability.is_court_slot_available(state, day, hour, now),
                blocked_reason=_blocked_reason(state, day, hour, hour + COURT_SLOT_HOURS),
                signups=signups,
                total_signups=signups.total,
            )
        )
    return rows


def private_court_grid(state: FacilityState, day: date, now: datetime) -> list[SlotAvailability]:
    return [
        SlotAvailability(
            start_hour=hour,
            end_hour=hour + COURT_SLOT_HOURS,
            available=availability.is_private_court_slot_available(state, day, hour, now),
            blocked_reason=_blocked_reason(state, day, hour, hour + COURT_SLOT_HOURS),
        )
        for hour in COURT_START_HOURS
    ]


def bay_grid(
    state: FacilityState, day: date, duration: int, now: datetime
) -> list[SlotAvailability]:
    rows = []
    hour = OPEN_HOUR
    while hour * 60 + duration <= CLOSE_HOUR * 60:
        end = hour * 60 + duration
        bays = availability.available_bays_for_slot(state, day, hour, 0, duration, now)
        rows.append(
            SlotAvailability(
                start_hour=hour,
                end_hour=end // 60,
                end_minute=end % 60,
                available=bool(bays),
                blocked_reason=_blocked_reason(state, day, hour, -(-end // 60)),
                available_bays=bays,
            )
        )
        hour += 1
    return rows


def day_availability(
    state: FacilityState,
    day: date,
    resource: Resource,
    now: datetime,
    duration: int = 60,
) -> AvailabilityResponse:
    if resource == Resource.COURT:
        return AvailabilityResponse(date=day, resource=resource, slots=court_grid(state, day, now))
    if resource == Resource.PRIVATE_COURT:
        return AvailabilityResponse(
            date=day, resource=resource, slots=private_court_grid(state, day, now)
        )
    return AvailabilityResponse(
        date=day, resource=resource, duration=duration, slots=bay_grid(state, day, duration, now)
    )
