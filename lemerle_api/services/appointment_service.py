import datetime as dt
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lemerle_api.core.errors import ConflictError, StoreError
from lemerle_api.models.appointment import Appointment, AppointmentCreate
from lemerle_api.services.slot_service import count_appointments_at, validate_slot

logger = logging.getLogger(__name__)


async def book_appointment(
    session: AsyncSession, data: AppointmentCreate, now: dt.datetime | None = None
) -> Appointment:
    """Validate the requested slot, check it is free and insert the booking.

    Calendar rules are checked before any query. The pre-insert count gives the
    common case a clean conflict; the unique constraint on (date, time) catches
    the concurrent case, which surfaces as the same ConflictError.
    """
    slot_date, slot_time = validate_slot(data.date, data.time, now=now)
    try:
        if await count_appointments_at(session, slot_date, slot_time) > 0:
            raise ConflictError("slot_taken")
        appointment = Appointment(
            name=data.name,
            email=data.email,
            phone=data.phone,
            date=slot_date,
            time=slot_time,
            service=data.service,
            message=data.message,
            locale=data.locale,
        )
        session.add(appointment)
        await session.flush()
        await session.refresh(appointment)
    except IntegrityError as e:
        await session.rollback()
        logger.warning("Slot %s %s taken by a concurrent booking: %s", slot_date, slot_time, e.orig)
        raise ConflictError("slot_taken") from e
    except SQLAlchemyError as e:
        logger.exception("Booking %s %s failed: %s", slot_date, slot_time, e)
        raise StoreError() from e
    logger.info(
        "Appointment booked: id=%s slot=%s %s service=%s",
        appointment.id, slot_date, slot_time, data.service,
    )
    return appointment
