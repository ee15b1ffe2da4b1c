from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lemerle_api.api.deps import get_session
from lemerle_api.api.schemas.appointment import AvailableSlotsResponse, SlotInfo
from lemerle_api.services.slot_service import get_available_slots_for_date

router = APIRouter(prefix="/slots", tags=["slots"])


@router.get("/available", response_model=AvailableSlotsResponse)
async def available_slots(
    date_param: date = Query(..., alias="date"),
    session: AsyncSession = Depends(get_session),
) -> AvailableSlotsResponse:
    """Return every bookable start time for the given date (business timezone), each flagged available or not."""
    slots_with_availability = await get_available_slots_for_date(session, date_param)
    return AvailableSlotsResponse(
        date=date_param.isoformat(),
        slots=[SlotInfo(time=t.strftime("%H:%M"), available=avail) for t, avail in slots_with_availability],
    )
