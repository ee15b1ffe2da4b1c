import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from lemerle_api.api.deps import get_locale, get_session
from lemerle_api.api.schemas.appointment import BookAppointmentRequest, BookAppointmentResponse
from lemerle_api.core.i18n import translate
from lemerle_api.models.appointment import Appointment, AppointmentCreate, AppointmentPublic
from lemerle_api.models.service import ServiceTitles
from lemerle_api.services.appointment_service import book_appointment
from lemerle_api.services.content_service import list_service_titles

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/appointments", tags=["appointments"])


def _to_public(a: Appointment) -> AppointmentPublic:
    return AppointmentPublic(
        id=int(a.id),
        name=a.name,
        email=a.email,
        phone=a.phone,
        date=a.date,
        time=a.time,
        service=a.service,
        message=a.message,
        created_at=a.created_at,
    )


@router.post("", response_model=BookAppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    body: BookAppointmentRequest,
    session: AsyncSession = Depends(get_session),
    locale: str = Depends(get_locale),
) -> BookAppointmentResponse:
    data = AppointmentCreate(
        name=body.name,
        email=body.email,
        phone=body.phone,
        date=body.date,
        time=body.time,
        service=body.service,
        message=body.message,
        locale=locale,
    )
    appointment = await book_appointment(session, data)
    return BookAppointmentResponse(
        message=translate("appointment_booked", locale),
        appointment=_to_public(appointment),
    )


@router.get("/services", response_model=list[ServiceTitles])
async def appointment_services(
    session: AsyncSession = Depends(get_session),
) -> list[ServiceTitles]:
    """Services offered in the booking form, titled in every locale."""
    return await list_service_titles(session)
