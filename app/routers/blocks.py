"""
Calendar block endpoints – admins close the facility for a range of hours.
"""

from datetime import date

from fastapi import APIRouter, Query, status

from app.dependencies import CurrentUser
from app.models import BlockCreate, BlockListResponse, CalendarBlock
from app.services import booking
from app.services.store import store

router = APIRouter(prefix="/api/blocks", tags=["blocks"])


@router.get(
    "",
    response_model=BlockListResponse,
    operation_id="listBlocks",
    summary="List calendar blocks",
)
async def list_blocks(
    current_user: CurrentUser,
    date_param: date | None = Query(None, alias="date", description="Only blocks on this day"),
) -> BlockListResponse:
    blocks = list(store.state.blocks)
    if date_param is not None:
        blocks = [b for b in blocks if b.date == date_param]
    blocks.sort(key=lambda b: (b.date, b.start_hour))
    return BlockListResponse(items=blocks, total=len(blocks))


@router.post(
    "",
    response_model=CalendarBlock,
    status_code=status.HTTP_201_CREATED,
    operation_id="createBlock",
    summary="Block the facility for a range of hours (admin only)",
)
async def create_block(body: BlockCreate, current_user: CurrentUser) -> CalendarBlock:
    return await store.apply(
        booking.create_block,
        current_user.id,
        body.date,
        body.start_hour,
        body.end_hour,
        body.reason,
    )
