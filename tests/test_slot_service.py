import datetime as dt

import pytest

from lemerle_api.core.errors import ValidationError
from lemerle_api.models.appointment import Appointment
from lemerle_api.services.slot_service import (
    business_slots_for_date,
    count_appointments_at,
    get_available_slots_for_date,
    is_within_business_hours,
    parse_slot,
    validate_slot,
)

MONDAY = "2025-06-02"
SATURDAY = "2025-06-07"
SUNDAY = "2025-06-08"


def _rejection_key(date_str: str, time_str: str, now: dt.datetime) -> str:
    with pytest.raises(ValidationError) as exc_info:
        validate_slot(date_str, time_str, now=now)
    return exc_info.value.key


def test_parse_slot_accepts_hh_mm_and_seconds():
    assert parse_slot("2025-06-02", "09:30") == (dt.date(2025, 6, 2), dt.time(9, 30))
    assert parse_slot(" 2025-06-02 ", "09:30:15") == (dt.date(2025, 6, 2), dt.time(9, 30, 15))


@pytest.mark.parametrize(
    "date_str,time_str",
    [
        ("", "09:00"),
        ("2025-13-01", "09:00"),
        ("02/06/2025", "09:00"),
        ("2025-06-02", "9h"),
        ("2025-06-02", "25:00"),
        ("2025-06-02", "09:00+01:00"),
        ("2025-W23-1", "09:00"),
        ("20250602", "09:00"),
        ("2025-06-02", "09"),
        ("2025-06-02", "0900"),
        ("2025-06-02T09:00", "09:00"),
        ("2025-06-02", "09:00:00.5"),
    ],
)
def test_parse_slot_rejects_malformed_input(date_str, time_str):
    with pytest.raises(ValidationError) as exc_info:
        parse_slot(date_str, time_str)
    assert exc_info.value.key == "invalid_datetime_format"


def test_business_hours_table():
    for weekday in range(7):
        for hour in range(24):
            if weekday <= 4:
                expected = 8 <= hour < 17
            elif weekday == 5:
                expected = 8 <= hour < 12
            else:
                expected = False
            assert is_within_business_hours(weekday, hour) is expected, (weekday, hour)


@pytest.mark.parametrize(
    "date_str,time_str,accepted",
    [
        (MONDAY, "08:00", True),
        (MONDAY, "16:59", True),
        (MONDAY, "17:00", False),
        (MONDAY, "07:59", False),
        (SATURDAY, "11:59", True),
        (SATURDAY, "12:00", False),
        (SUNDAY, "10:00", False),
    ],
)
def test_boundaries(fixed_now, date_str, time_str, accepted):
    if accepted:
        assert validate_slot(date_str, time_str, now=fixed_now) == parse_slot(date_str, time_str)
    else:
        assert _rejection_key(date_str, time_str, fixed_now) == "invalid_datetime"


@pytest.mark.parametrize("time_str", ["00:00", "09:00", "12:00", "16:59", "23:59"])
def test_past_dates_rejected_regardless_of_time(fixed_now, time_str):
    # Friday before fixed_now, inside business hours for most of these times
    assert _rejection_key("2025-05-30", time_str, fixed_now) == "past_date"


def test_same_day_booking_is_not_past(fixed_now):
    # fixed_now is Sunday 10:00; a Monday "now" with an earlier hour is still bookable
    monday_afternoon = fixed_now + dt.timedelta(days=1, hours=6)
    assert validate_slot(MONDAY, "09:00", now=monday_afternoon) == (dt.date(2025, 6, 2), dt.time(9, 0))


def test_start_of_today_uses_business_timezone(fixed_now):
    # 23:30 UTC on Monday is already Tuesday 00:30 in Tunis
    late_monday_utc = dt.datetime(2025, 6, 2, 23, 30, tzinfo=dt.UTC)
    assert _rejection_key(MONDAY, "09:00", late_monday_utc) == "past_date"


def test_rejection_is_stable(fixed_now):
    first = _rejection_key(SUNDAY, "10:00", fixed_now)
    second = _rejection_key(SUNDAY, "10:00", fixed_now)
    assert first == second == "invalid_datetime"


def test_business_slots_for_date():
    monday = business_slots_for_date(dt.date(2025, 6, 2))
    assert monday[0] == dt.time(8, 0)
    assert monday[-1] == dt.time(16, 30)
    assert len(monday) == 18

    saturday = business_slots_for_date(dt.date(2025, 6, 7))
    assert saturday == [dt.time(8, 0), dt.time(8, 30), dt.time(9, 0), dt.time(9, 30),
                        dt.time(10, 0), dt.time(10, 30), dt.time(11, 0), dt.time(11, 30)]

    assert business_slots_for_date(dt.date(2025, 6, 8)) == []


@pytest.mark.asyncio
async def test_count_appointments_at(session):
    session.add(
        Appointment(
            name="A", email="a@x.com", phone="123",
            date=dt.date(2025, 6, 2), time=dt.time(9, 0), service="1",
        )
    )
    await session.commit()

    assert await count_appointments_at(session, dt.date(2025, 6, 2), dt.time(9, 0)) == 1
    assert await count_appointments_at(session, dt.date(2025, 6, 2), dt.time(9, 30)) == 0
    assert await count_appointments_at(session, dt.date(2025, 6, 3), dt.time(9, 0)) == 0


@pytest.mark.asyncio
async def test_available_slots_marks_booked_times(session, fixed_now):
    session.add(
        Appointment(
            name="A", email="a@x.com", phone="123",
            date=dt.date(2025, 6, 7), time=dt.time(9, 30), service="1",
        )
    )
    await session.commit()

    slots = dict(await get_available_slots_for_date(session, dt.date(2025, 6, 7), now=fixed_now))
    assert slots[dt.time(9, 30)] is False
    assert slots[dt.time(9, 0)] is True
    assert len(slots) == 8


@pytest.mark.asyncio
async def test_available_slots_for_past_date_are_all_taken(session, fixed_now):
    slots = await get_available_slots_for_date(session, dt.date(2025, 5, 30), now=fixed_now)
    assert slots
    assert not any(available for _, available in slots)
