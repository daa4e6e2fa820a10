"""
Booking endpoints – courts, practice bays and private courts.
"""

from typing import Annotated

from fastapi import APIRouter, Body, status

from app.dependencies import CurrentUser
from app.models import BookingRequest, BookingResponse, MySessions, Resource
from app.services import booking
from app.services.sessions import sessions_for_user
from app.services.store import store

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createBooking",
    summary="Book a court session, a practice bay or a private court",
)
async def create_booking(
    current_user: CurrentUser,
    body: Annotated[BookingRequest, Body(discriminator="resource")],
) -> BookingResponse:
    reservation, user = await store.apply(
        booking.place_booking, current_user.id, body, store.now()
    )
    return BookingResponse(
        resource=Resource(body.resource),
        reservation=reservation,
        credits_remaining=user.credits,
    )


@router.get(
    "/mine",
    response_model=MySessions,
    operation_id="listMySessions",
    summary="The caller's bookings and joined group events",
)
async def list_my_sessions(current_user: CurrentUser) -> MySessions:
    return sessions_for_user(store.state, current_user.id)
