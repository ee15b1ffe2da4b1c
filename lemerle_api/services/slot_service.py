import datetime as dt

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lemerle_api.core.config import settings
from lemerle_api.core.errors import ValidationError
from lemerle_api.models.appointment import Appointment

SATURDAY = 5
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMATS = ("%H:%M", "%H:%M:%S")


def parse_slot(date_str: str, time_str: str) -> tuple[dt.date, dt.time]:
    """Parse YYYY-MM-DD and HH:MM[:SS] into a (date, time) pair.

    Raises ValidationError(invalid_datetime_format) on anything else, including
    times carrying a UTC offset: slots are wall-clock times in the business timezone.
    """
    try:
        d = dt.datetime.strptime(date_str.strip(), DATE_FORMAT).date()
    except (AttributeError, TypeError, ValueError) as e:
        raise ValidationError("invalid_datetime_format") from e
    for fmt in TIME_FORMATS:
        try:
            return d, dt.datetime.strptime(time_str.strip(), fmt).time()
        except (AttributeError, TypeError, ValueError):
            continue
    raise ValidationError("invalid_datetime_format")


def is_within_business_hours(weekday: int, hour: int) -> bool:
    """Monday-Friday [open, close), Saturday [open, close), Sunday closed."""
    if weekday < SATURDAY:
        return settings.weekday_open_hour <= hour < settings.weekday_close_hour
    if weekday == SATURDAY:
        return settings.saturday_open_hour <= hour < settings.saturday_close_hour
    return False


def _now() -> dt.datetime:
    return dt.datetime.now(settings.tz)


def _start_of_today(now: dt.datetime) -> dt.datetime:
    local = now.astimezone(settings.tz) if now.tzinfo else now.replace(tzinfo=settings.tz)
    return dt.datetime.combine(local.date(), dt.time.min, tzinfo=settings.tz)


def is_past(d: dt.date, t: dt.time, now: dt.datetime | None = None) -> bool:
    """True if the slot lies before the start of today; same-day slots are never past."""
    requested = dt.datetime.combine(d, t, tzinfo=settings.tz)
    return requested < _start_of_today(now or _now())


def validate_slot(
    date_str: str, time_str: str, now: dt.datetime | None = None
) -> tuple[dt.date, dt.time]:
    """Check a requested slot against the calendar rules only (no database access)."""
    d, t = parse_slot(date_str, time_str)
    if is_past(d, t, now):
        raise ValidationError("past_date")
    if not is_within_business_hours(d.weekday(), t.hour):
        raise ValidationError("invalid_datetime")
    return d, t


async def count_appointments_at(session: AsyncSession, d: dt.date, t: dt.time) -> int:
    result = await session.execute(
        select(func.count()).select_from(Appointment).where(
            Appointment.date == d,
            Appointment.time == t,
        )
    )
    return result.scalar_one()


async def get_booked_times(session: AsyncSession, d: dt.date) -> set[dt.time]:
    result = await session.execute(select(Appointment.time).where(Appointment.date == d))
    return {row[0] for row in result.all()}


def business_slots_for_date(d: dt.date) -> list[dt.time]:
    """Slot start times every slot_step_minutes within the opening hours of that weekday."""
    weekday = d.weekday()
    if weekday < SATURDAY:
        open_hour, close_hour = settings.weekday_open_hour, settings.weekday_close_hour
    elif weekday == SATURDAY:
        open_hour, close_hour = settings.saturday_open_hour, settings.saturday_close_hour
    else:
        return []
    slots: list[dt.time] = []
    current = dt.datetime.combine(d, dt.time(open_hour))
    end = dt.datetime.combine(d, dt.time(close_hour))
    delta = dt.timedelta(minutes=settings.slot_step_minutes)
    while current < end:
        slots.append(current.time())
        current += delta
    return slots


async def get_available_slots_for_date(
    session: AsyncSession, d: dt.date, now: dt.datetime | None = None
) -> list[tuple[dt.time, bool]]:
    """Returns list of (slot_time, available) for the given date."""
    slots = business_slots_for_date(d)
    if not slots:
        return []
    if is_past(d, slots[0], now):
        return [(s, False) for s in slots]
    booked = await get_booked_times(session, d)
    return [(s, s not in booked) for s in slots]
