"""
Group training events – admins create them, members join them.
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import CurrentUser, PaginationParams, paginate
from app.models import (
    GroupEventCreate,
    GroupEventListResponse,
    GroupTrainingEvent,
    JoinEventResponse,
)
from app.services import booking
from app.services.store import store

router = APIRouter(prefix="/api/events", tags=["events"])


@router.get(
    "",
    response_model=GroupEventListResponse,
    operation_id="listEvents",
    summary="List group training events",
)
async def list_events(
    pagination: PaginationParams = Depends(PaginationParams),
    date_from: date | None = Query(None, description="Start date (inclusive)"),
    date_to: date | None = Query(None, description="End date (inclusive)"),
) -> GroupEventListResponse:
    events = list(store.state.events)
    if date_from is not None:
        events = [e for e in events if e.date >= date_from]
    if date_to is not None:
        events = [e for e in events if e.date <= date_to]
    events.sort(key=lambda e: (e.date, e.hour))
    return paginate(events, pagination, GroupEventListResponse)


@router.get(
    "/{event_id}",
    response_model=GroupTrainingEvent,
    operation_id="getEvent",
    summary="Get a group training event",
)
async def get_event(event_id: UUID) -> GroupTrainingEvent:
    return store.state.get_event(event_id)


@router.post(
    "",
    response_model=GroupTrainingEvent,
    status_code=status.HTTP_201_CREATED,
    operation_id="createEvent",
    summary="Create a group training event (admin only)",
)
async def create_event(body: GroupEventCreate, current_user: CurrentUser) -> GroupTrainingEvent:
    return await store.apply(
        booking.create_group_event,
        current_user.id,
        body.date,
        body.hour,
        body.duration,
        body.title,
        body.description,
        body.max_participants,
        body.credits_required,
        now=store.now(),
    )


@router.post(
    "/{event_id}/join",
    response_model=JoinEventResponse,
    operation_id="joinEvent",
    summary="Join a group training event",
)
async def join_event(event_id: UUID, current_user: CurrentUser) -> JoinEventResponse:
    event, user = await store.apply(booking.join_group_event_for, current_user.id, event_id)
    return JoinEventResponse(event=event, credits_remaining=user.credits)
