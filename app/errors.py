"""
Booking rejections.

Every mutator raises one of these on the first failing precondition.
The API layer turns them into an ``Error`` JSON body with the matching
HTTP status (see ``app.main``).
"""

from __future__ import annotations

from typing import Any


class BookingError(Exception):
    """Base class for all user-facing booking rejections."""

    code = "booking_error"
    status_code = 400

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or None


class InsufficientCredits(BookingError):
    code = "insufficient_credits"
    status_code = 402


class SlotUnavailable(BookingError):
    code = "slot_unavailable"
    status_code = 409


class AlreadyBooked(BookingError):
    code = "already_booked"
    status_code = 409


class AlreadyRegistered(AlreadyBooked):
    code = "already_registered"


class CapacityFull(BookingError):
    code = "capacity_full"
    status_code = 409


class PastTime(BookingError):
    code = "past_time"
    status_code = 400


class Unauthorized(BookingError):
    code = "unauthorized"
    status_code = 403


class BookingValidationError(BookingError):
    code = "validation_error"
    status_code = 400


class NotFound(BookingError):
    code = "not_found"
    status_code = 404
