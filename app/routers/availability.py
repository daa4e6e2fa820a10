"""
Availability endpoint – one day's grid for courts, bays or private courts.
"""

from datetime import date

from fastapi import APIRouter, Query

from app.config import BAY_DURATIONS
from app.errors import BookingValidationError
from app.models import AvailabilityResponse, Resource
from app.services import calendar
from app.services.store import store

router = APIRouter(prefix="/api", tags=["availability"])


@router.get(
    "/availability",
    response_model=AvailabilityResponse,
    operation_id="getAvailability",
    summary="Free and occupied slots for one day",
)
async def get_availability(
    date_param: date | None = Query(None, alias="date", description="Day to show (defaults to today)"),
    resource: Resource = Query(Resource.COURT),
    duration: int = Query(60, description="Bay duration in minutes (ignored for courts)"),
) -> AvailabilityResponse:
    if resource == Resource.BAY and duration not in BAY_DURATIONS:
        raise BookingValidationError(
            f"Duration must be one of {list(BAY_DURATIONS)}", duration=duration
        )
    now = store.now()
    return calendar.day_availability(
        store.state, date_param or now.date(), resource, now, duration=duration
    )
