"""Pydantic models for the Blazing Paddles reservation API."""

from __future__ import annotations

import datetime as dt
from enum import StrEnum
from typing import Any, Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.config import (
    BAY_COUNT,
    CLOSE_HOUR,
    EVENT_DEFAULT_CREDITS_REQUIRED,
    EVENT_DEFAULT_DURATION_HOURS,
    EVENT_DEFAULT_MAX_PARTICIPANTS,
    OPEN_HOUR,
)


class CourtLevel(StrEnum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    CHALLENGE = "challenge"


class Role(StrEnum):
    MEMBER = "member"
    ADMIN = "admin"


class Resource(StrEnum):
    COURT = "court"
    BAY = "bay"
    PRIVATE_COURT = "private-court"


BayDuration = Literal[30, 60, 90, 120]


# ── Entities ───────────────────────────────────────────────────────────────


class _Record(BaseModel):
    """Immutable base for everything held in the facility state."""

    model_config = ConfigDict(frozen=True)


class User(_Record):
    id: str = Field(..., description="Stable user identifier")
    email: EmailStr = Field(..., description="Sign-in email address")
    name: str = Field(..., description="Display name")
    role: Role = Field(default=Role.MEMBER)
    credits: int = Field(default=0, ge=0, description="Remaining booking credits")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class CourtReservation(_Record):
    """A signup for a two-hour leveled court session starting at ``hour``."""

    id: UUID = Field(default_factory=uuid4)
    date: dt.date
    hour: int
    court_type: CourtLevel
    user_id: str


class BayReservation(_Record):
    """A practice bay booking covering ``[start, start + duration)`` minutes."""

    id: UUID = Field(default_factory=uuid4)
    date: dt.date
    start_hour: int
    start_minute: int = 0
    duration: int = Field(..., description="Minutes")
    bay_number: int
    user_id: str

    @property
    def start(self) -> int:
        return self.start_hour * 60 + self.start_minute

    @property
    def end(self) -> int:
        return self.start + self.duration


class PrivateCourtReservation(_Record):
    id: UUID = Field(default_factory=uuid4)
    date: dt.date
    hour: int
    user_id: str


class CalendarBlock(_Record):
    """Admin-imposed closure of the whole facility for ``[start_hour, end_hour)``."""

    id: UUID = Field(default_factory=uuid4)
    date: dt.date
    start_hour: int
    end_hour: int
    reason: str
    created_by: str | None = None


class GroupTrainingEvent(_Record):
    id: UUID = Field(default_factory=uuid4)
    date: dt.date
    hour: int
    duration: int = Field(..., description="Hours")
    title: str
    description: str
    max_participants: int
    credits_required: int
    participants: tuple[str, ...] = ()

    @property
    def is_full(self) -> bool:
        return len(self.participants) >= self.max_participants


# ── Requests ───────────────────────────────────────────────────────────────


class CourtBookingRequest(BaseModel):
    resource: Literal["court"] = "court"
    date: dt.date
    hour: int = Field(..., ge=OPEN_HOUR, lt=CLOSE_HOUR, description="Session start hour")
    level: CourtLevel
    user_id: str | None = Field(None, description="Book on behalf of another user (admin only)")


class BayBookingRequest(BaseModel):
    resource: Literal["bay"] = "bay"
    date: dt.date
    start_hour: int = Field(..., ge=OPEN_HOUR, lt=CLOSE_HOUR)
    start_minute: int = Field(0, ge=0, le=59)
    duration: BayDuration
    bay_number: int = Field(..., ge=1, le=BAY_COUNT)
    user_id: str | None = Field(None, description="Book on behalf of another user (admin only)")


class PrivateCourtBookingRequest(BaseModel):
    resource: Literal["private-court"] = "private-court"
    date: dt.date
    hour: int = Field(..., ge=OPEN_HOUR, lt=CLOSE_HOUR)
    user_id: str | None = Field(None, description="Book on behalf of another user (admin only)")


BookingRequest = CourtBookingRequest | BayBookingRequest | PrivateCourtBookingRequest


class BlockCreate(BaseModel):
    date: dt.date
    start_hour: int = Field(..., ge=OPEN_HOUR, le=CLOSE_HOUR)
    end_hour: int = Field(..., ge=OPEN_HOUR, le=CLOSE_HOUR)
    reason: str = Field(..., min_length=1, max_length=200)


class GroupEventCreate(BaseModel):
    date: dt.date
    hour: int = Field(..., ge=OPEN_HOUR, lt=CLOSE_HOUR)
    duration: int = Field(EVENT_DEFAULT_DURATION_HOURS, ge=1)
    title: str = Field(..., min_length=1, max_length=120)
    description: str = Field(..., min_length=1)
    max_participants: int = Field(EVENT_DEFAULT_MAX_PARTICIPANTS, ge=1)
    credits_required: int = Field(EVENT_DEFAULT_CREDITS_REQUIRED, ge=0)


class CreditPurchaseRequest(BaseModel):
    credits: int = Field(..., description="One of the offered package sizes")


# ── Responses ──────────────────────────────────────────────────────────────


class Error(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    details: dict[str, Any] | None = Field(None, description="Additional error details")


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: dt.datetime


class MessageResponse(BaseModel):
    message: str


class PaginationMeta(BaseModel):
    page: int
    page_size: int
    total_items: int
    total_pages: int


class LevelSignups(BaseModel):
    beginner: list[str] = Field(default_factory=list)
    intermediate: list[str] = Field(default_factory=list)
    advanced: list[str] = Field(default_factory=list)
    challenge: list[str] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(len(v) for v in self.model_dump().values())


class SlotAvailability(BaseModel):
    """One row of a day's availability grid."""

    start_hour: int
    start_minute: int = 0
    end_hour: int
    end_minute: int = 0
    available: bool
    blocked_reason: str | None = None
    signups: LevelSignups | None = None
    total_signups: int | None = None
    available_bays: list[int] | None = None


class AvailabilityResponse(BaseModel):
    date: dt.date
    resource: Resource
    duration: int | None = Field(None, description="Bay duration used for the grid (minutes)")
    slots: list[SlotAvailability]


class BookingResponse(BaseModel):
    resource: Resource
    reservation: CourtReservation | BayReservation | PrivateCourtReservation
    credits_remaining: int


class MySessions(BaseModel):
    court_reservations: list[CourtReservation]
    bay_reservations: list[BayReservation]
    private_court_reservations: list[PrivateCourtReservation]
    group_events: list[GroupTrainingEvent]


class BlockListResponse(BaseModel):
    items: list[CalendarBlock]
    total: int


class GroupEventListResponse(BaseModel):
    items: list[GroupTrainingEvent]
    meta: PaginationMeta


class JoinEventResponse(BaseModel):
    event: GroupTrainingEvent
    credits_remaining: int


class CreditPackage(BaseModel):
    credits: int
    paid_sessions: int
    price: int = Field(..., description="USD")
    savings: int = Field(..., description="USD")
    price_per_credit: float


class CreditPackageList(BaseModel):
    items: list[CreditPackage]


class CreditPurchaseReceipt(BaseModel):
    package: CreditPackage
    credits_balance: int


# ── Auth ───────────────────────────────────────────────────────────────────


class OtpRequest(BaseModel):
    email: EmailStr


class OtpRequestResponse(BaseModel):
    message: str
    expires_in_seconds: int


class OtpVerifyRequest(BaseModel):
    email: EmailStr
    otp_code: str = Field(..., min_length=6, max_length=6, pattern=r"^\d{6}$")


class AuthResponse(BaseModel):
    message: str
    user: User
