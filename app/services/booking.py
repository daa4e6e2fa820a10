"""
Booking mutators.

Each function takes the current ``FacilityState`` plus a command and
returns ``(new_state, result)``.  Preconditions are checked in a fixed
order and the first failure raises a ``BookingError``; the input state is
never modified, so a rejection leaves nothing behind.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime

from app.config import (
    BAY_CREDIT_COST,
    CLOSE_HOUR,
    COURT_CREDIT_COST,
    COURT_LEVEL_CAPACITY,
    COURT_START_HOURS,
    OPEN_HOUR,
    PRIVATE_COURT_CREDIT_COST,
)
from app.errors import (
    AlreadyBooked,
    AlreadyRegistered,
    BookingValidationError,
    CapacityFull,
    InsufficientCredits,
    PastTime,
    SlotUnavailable,
    Unauthorized,
)
from app.models import (
    BayBookingRequest,
    BayReservation,
    BookingRequest,
    CalendarBlock,
    CourtBookingRequest,
    CourtLevel,
    CourtReservation,
    GroupTrainingEvent,
    PrivateCourtReservation,
    User,
)
from app.services import availability
from app.services.state import FacilityState

logger = logging.getLogger(__name__)


# ── Helpers ────────────────────────────────────────────────────────────────


def _require_credits(user: User, cost: int, what: str) -> None:
    if user.credits < cost:
        raise InsufficientCredits(
            f"Insufficient credits. {what} requires {cost} credit(s).",
            required=cost,
            available=user.credits,
        )


def _require_admin(state: FacilityState, actor_id: str) -> User:
    actor = state.get_user(actor_id)
    if not actor.is_admin:
        raise Unauthorized("Only admins can do this")
    return actor


def _charge(state: FacilityState, user: User, cost: int) -> FacilityState:
    return state.with_user(user.model_copy(update={"credits": user.credits - cost}))


def resolve_booker(state: FacilityState, actor_id: str, user_id: str | None) -> str:
    """Who a booking is for: the actor, or someone else if the actor is an admin."""
    if user_id is None or user_id == actor_id:
        return actor_id
    _require_admin(state, actor_id)
    state.get_user(user_id)
    return user_id


# ── Courts ─────────────────────────────────────────────────────────────────


def book_court(
    state: FacilityState,
    user_id: str,
    day: date,
    hour: int,
    level: CourtLevel,
    now: datetime,
) -> tuple[FacilityState, CourtReservation]:
    user = state.get_user(user_id)
    _require_credits(user, COURT_CREDIT_COST, "A court session")

    if availability.is_past(day, hour, now):
        raise PastTime("Cannot book a time slot in the past")
    if hour not in COURT_START_HOURS:
        raise SlotUnavailable(
            "Court sessions start every two hours from opening",
            hour=hour,
            start_hours=list(COURT_START_HOURS),
        )
    if not availability.is_court_slot_available(state, day, hour, now):
        raise SlotUnavailable(
            "This time slot is not available (conflicts with an existing 2-hour booking)",
            date=day.isoformat(),
            hour=hour,
        )
    if availability.user_court_signup(state, day, hour, user_id):
        raise AlreadyBooked("You are already signed up for this time slot")

    roster = getattr(availability.signups_for_slot(state, day, hour), level.value)
    if len(roster) >= COURT_LEVEL_CAPACITY:
        raise CapacityFull(
            f"{level.value.capitalize()} court is full", capacity=COURT_LEVEL_CAPACITY
        )

    reservation = CourtReservation(date=day, hour=hour, court_type=level, user_id=user_id)
    state = replace(state, court_reservations=state.court_reservations + (reservation,))
    return _charge(state, user, COURT_CREDIT_COST), reservation


# ── Bays ───────────────────────────────────────────────────────────────────


def book_bay(
    state: FacilityState,
    user_id: str,
    day: date,
    hour: int,
    minute: int,
    duration: int,
    bay_number: int,
    now: datetime,
) -> tuple[FacilityState, BayReservation]:
    user = state.get_user(user_id)
    _require_credits(user, BAY_CREDIT_COST, "A bay booking")

    if availability.is_past(day, hour, now, minute):
        raise PastTime("Cannot book a time slot in the past")
    if not availability.is_bay_slot_available(
        state, day, hour, minute, duration, bay_number, now
    ):
        raise SlotUnavailable(
            f"Bay {bay_number} is not available for this time and duration",
            bay_number=bay_number,
            duration=duration,
        )

    start = hour * 60 + minute
    if availability.user_bay_overlap(state, day, start, start + duration, user_id):
        raise AlreadyBooked("You already have a bay reservation that overlaps with this time")

    reservation = BayReservation(
        date=day,
        start_hour=hour,
        start_minute=minute,
        duration=duration,
        bay_number=bay_number,
        user_id=user_id,
    )
    state = replace(state, bay_reservations=state.bay_reservations + (reservation,))
    return _charge(state, user, BAY_CREDIT_COST), reservation


# ── Private courts ─────────────────────────────────────────────────────────


def book_private_court(
    state: FacilityState,
    user_id: str,
    day: date,
    hour: int,
    now: datetime,
) -> tuple[FacilityState, PrivateCourtReservation]:
    user = state.get_user(user_id)
    _require_credits(user, PRIVATE_COURT_CREDIT_COST, "Private court booking")

    if availability.is_past(day, hour, now):
        raise PastTime("Cannot book a time slot in the past")
    if any(r.hour == hour and r.user_id == user_id for r in state.private_courts_on(day)):
        raise AlreadyBooked("You already have a private court booking for this time slot")
    if not availability.is_private_court_slot_available(state, day, hour, now):
        raise SlotUnavailable("This time slot is not available for private court booking")

    reservation = PrivateCourtReservation(date=day, hour=hour, user_id=user_id)
    state = replace(
        state,
        private_court_reservations=state.private_court_reservations + (reservation,),
    )
    return _charge(state, user, PRIVATE_COURT_CREDIT_COST), reservation


# ── Admin: blocks and events ───────────────────────────────────────────────


def create_block(
    state: FacilityState,
    actor_id: str,
    day: date,
    start_hour: int,
    end_hour: int,
    reason: str,
) -> tuple[FacilityState, CalendarBlock]:
    """Close the facility for ``[start_hour, end_hour)``. Blocks may overlap."""
    _require_admin(state, actor_id)
    reason = reason.strip()
    if not reason:
        raise BookingValidationError("A reason is required")
    if not OPEN_HOUR <= start_hour < end_hour <= CLOSE_HOUR:
        raise BookingValidationError(
            f"Block must satisfy {OPEN_HOUR} <= start < end <= {CLOSE_HOUR}",
            start_hour=start_hour,
            end_hour=end_hour,
        )

    block = CalendarBlock(
        date=day, start_hour=start_hour, end_hour=end_hour, reason=reason, created_by=actor_id
    )
    return replace(state, blocks=state.blocks + (block,)), block


def create_group_event(
    state: FacilityState,
    actor_id: str,
    day: date,
    hour: int,
    duration: int,
    title: str,
    description: str,
    max_participants: int,
    credits_required: int,
    now: datetime,
) -> tuple[FacilityState, GroupTrainingEvent]:
    _require_admin(state, actor_id)
    if availability.is_past(day, hour, now):
        raise PastTime("Cannot create an event for a time in the past")

    title, description = title.strip(), description.strip()
    if not title or not description:
        raise BookingValidationError("Please fill in all required fields")
    if duration < 1 or not OPEN_HOUR <= hour or hour + duration > CLOSE_HOUR:
        raise BookingValidationError(
            "Event must lie within opening hours", hour=hour, duration=duration
        )
    if max_participants < 1 or credits_required < 0:
        raise BookingValidationError("Invalid participant limit or credit price")

    event = GroupTrainingEvent(
        date=day,
        hour=hour,
        duration=duration,
        title=title,
        description=description,
        max_participants=max_participants,
        credits_required=credits_required,
    )
    return replace(state, events=state.events + (event,)), event


def join_group_event(
    state: FacilityState, user_id: str, event_id
) -> tuple[FacilityState, GroupTrainingEvent]:
    """Add the user to an event's participants and charge its credit price.

    No overlap check against the user's own court or bay bookings.
    """
    user = state.get_user(user_id)
    event = state.get_event(event_id)

    if event.is_full:
        raise CapacityFull("This event is full", max_participants=event.max_participants)
    if user_id in event.participants:
        raise AlreadyRegistered("You are already registered for this event")
    _require_credits(user, event.credits_required, f"'{event.title}'")

    joined = event.model_copy(update={"participants": event.participants + (user_id,)})
    events = tuple(joined if e.id == event.id else e for e in state.events)
    state = replace(state, events=events)
    return _charge(state, user, event.credits_required), joined


def join_group_event_for(
    state: FacilityState, user_id: str, event_id
) -> tuple[FacilityState, tuple[GroupTrainingEvent, User]]:
    """``join_group_event`` plus the member's account as committed."""
    state, event = join_group_event(state, user_id, event_id)
    return state, (event, state.get_user(user_id))


# ── Users ──────────────────────────────────────────────────────────────────


def register_member(
    state: FacilityState, email: str, credits: int
) -> tuple[FacilityState, User]:
    """Return the existing account for ``email`` or create a member account."""
    existing = state.find_user_by_email(email)
    if existing is not None:
        return state, existing

    user = User(
        id=f"member-{len(state.users) + 1}",
        email=email,
        name=email.split("@", 1)[0],
        credits=credits,
    )
    while user.id in state.users:
        user = user.model_copy(update={"id": f"{user.id}-1"})
    logger.info("Registered new member %s (%s)", user.id, email)
    return state.with_user(user), user

# ── Requests ───────────────────────────────────────────────────────────────


def place_booking(
    state: FacilityState, actor_id: str, request: BookingRequest, now: datetime
) -> tuple[FacilityState, tuple[CourtReservation | BayReservation | PrivateCourtReservation, User]]:
    """Book ``request`` for the actor, or for ``request.user_id`` if the actor is an admin.

    Returns the reservation together with the booked user's account taken
    from the same new state, so the balance matches this commit.
    """
    user_id = resolve_booker(state, actor_id, request.user_id)
    if isinstance(request, CourtBookingRequest):
        state, reservation = book_court(
            state, user_id, request.date, request.hour, request.level, now
        )
    elif isinstance(request, BayBookingRequest):
        state, reservation = book_bay(
            state,
            user_id,
            request.date,
            request.start_hour,
            request.start_minute,
            request.duration,
            request.bay_number,
            now,
        )
    else:
        state, reservation = book_private_court(state, user_id, request.date, request.hour, now)
    return state, (reservation, state.get_user(user_id))
