import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from lemerle_api.core.i18n import translate
from lemerle_api.models.appointment import Appointment
from lemerle_api.models.service import Service
from lemerle_api.services import appointment_service

BOOKING = {
    "name": "A",
    "email": "a@x.com",
    "phone": "123",
    "date": "2025-06-02",
    "time": "09:00",
    "service": "1",
}


async def _row_count(session_maker) -> int:
    async with session_maker() as session:
        result = await session.execute(select(func.count()).select_from(Appointment))
        return result.scalar_one()


@pytest.mark.asyncio
async def test_book_then_repeat_conflicts(client, session_maker, frozen_clock):
    resp = await client.post("/api/v1/appointments", json=BOOKING)
    assert resp.status_code == 201
    data = resp.json()
    assert data["message"] == translate("appointment_booked", "fr")
    assert data["appointment"]["date"] == "2025-06-02"
    assert data["appointment"]["time"] == "09:00:00"
    assert await _row_count(session_maker) == 1

    resp = await client.post("/api/v1/appointments", json=BOOKING)
    assert resp.status_code == 409
    assert resp.json()["code"] == "slot_taken"
    assert resp.json()["detail"] == translate("slot_taken", "fr")
    assert await _row_count(session_maker) == 1


@pytest.mark.asyncio
async def test_error_message_follows_lang(client, frozen_clock):
    resp = await client.post("/api/v1/appointments?lang=en", json={**BOOKING, "date": "2025-06-08"})
    assert resp.status_code == 400
    assert resp.json() == {"detail": translate("invalid_datetime", "en"), "code": "invalid_datetime"}

    resp = await client.post("/api/v1/appointments?lang=ar", json={**BOOKING, "date": "2025-06-08"})
    assert resp.json()["detail"] == translate("invalid_datetime", "ar")


@pytest.mark.asyncio
async def test_past_date_is_rejected(client, frozen_clock):
    resp = await client.post("/api/v1/appointments", json={**BOOKING, "date": "2025-05-30"})
    assert resp.status_code == 400
    assert resp.json()["code"] == "past_date"


@pytest.mark.asyncio
async def test_malformed_time_is_a_client_error(client, frozen_clock):
    resp = await client.post("/api/v1/appointments?lang=en", json={**BOOKING, "time": "nine"})
    assert resp.status_code == 400
    assert resp.json()["code"] == "invalid_datetime_format"


@pytest.mark.asyncio
async def test_missing_field_is_a_localized_400(client, frozen_clock):
    payload = {k: v for k, v in BOOKING.items() if k != "phone"}
    resp = await client.post("/api/v1/appointments?lang=en", json=payload)
    assert resp.status_code == 400
    body = resp.json()
    assert body["detail"] == translate("invalid_payload", "en")
    assert any(err["loc"][-1] == "phone" for err in body["errors"])


@pytest.mark.asyncio
async def test_numeric_service_id_is_accepted(client, frozen_clock):
    resp = await client.post("/api/v1/appointments", json={**BOOKING, "service": 3})
    assert resp.status_code == 201
    assert resp.json()["appointment"]["service"] == "3"


@pytest.mark.asyncio
async def test_unknown_language_is_rejected(client, frozen_clock):
    resp = await client.post("/api/v1/appointments?lang=de", json=BOOKING)
    assert resp.status_code == 400
    assert resp.json() == {"detail": translate("invalid_language", "fr"), "code": "invalid_language"}


@pytest.mark.asyncio
async def test_appointment_services_lists_titles(client, session_maker):
    async with session_maker() as session:
        session.add(Service(title_fr="Soins à domicile", title_en="Home care", title_ar="رعاية منزلية"))
        await session.commit()

    resp = await client.get("/api/v1/appointments/services")
    assert resp.status_code == 200
    assert resp.json() == [
        {"id": 1, "title_fr": "Soins à domicile", "title_en": "Home care", "title_ar": "رعاية منزلية"}
    ]


@pytest.mark.asyncio
async def test_available_slots_endpoint(client, frozen_clock):
    await client.post("/api/v1/appointments", json={**BOOKING, "date": "2025-06-07", "time": "10:00"})

    resp = await client.get("/api/v1/slots/available", params={"date": "2025-06-07"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["date"] == "2025-06-07"
    slots = {s["time"]: s["available"] for s in body["slots"]}
    assert slots["10:00"] is False
    assert slots["11:30"] is True
    assert "12:00" not in slots


@pytest.mark.asyncio
async def test_available_slots_sunday_is_empty(client, frozen_clock):
    resp = await client.get("/api/v1/slots/available", params={"date": "2025-06-08"})
    assert resp.json() == {"date": "2025-06-08", "slots": []}


@pytest.mark.asyncio
async def test_datastore_failure_is_a_generic_500(client, session_maker, frozen_clock, monkeypatch):
    async def _db_down(*args, **kwargs):
        raise OperationalError("SELECT count(*) FROM appointments", {}, Exception("connection refused"))

    monkeypatch.setattr(appointment_service, "count_appointments_at", _db_down)

    resp = await client.post("/api/v1/appointments?lang=en", json=BOOKING)
    assert resp.status_code == 500
    assert resp.json() == {"detail": translate("store_error", "en"), "code": "store_error"}
    assert await _row_count(session_maker) == 0


@pytest.mark.asyncio
async def test_datastore_failure_on_insert_writes_nothing(client, session_maker, frozen_clock, monkeypatch):
    async def _flush_fails(self, *args, **kwargs):
        raise OperationalError("INSERT INTO appointments", {}, Exception("disk I/O error"))

    monkeypatch.setattr("sqlalchemy.ext.asyncio.AsyncSession.flush", _flush_fails)

    resp = await client.post("/api/v1/appointments", json=BOOKING)
    assert resp.status_code == 500
    assert resp.json()["code"] == "store_error"
    monkeypatch.undo()
    assert await _row_count(session_maker) == 0
