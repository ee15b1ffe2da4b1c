from pydantic import BaseModel, EmailStr, field_validator

from lemerle_api.models.appointment import AppointmentPublic


class BookAppointmentRequest(BaseModel):
    name: str
    email: EmailStr
    phone: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    service: str
    message: str | None = None

    @field_validator("service", mode="before")
    @classmethod
    def _service_id_as_str(cls, v: object) -> object:
        # the booking form posts the select value, which may arrive as a number
        return str(v) if isinstance(v, int) else v


class BookAppointmentResponse(BaseModel):
    message: str
    appointment: AppointmentPublic


class SlotInfo(BaseModel):
    time: str  # HH:MM
    available: bool


class AvailableSlotsResponse(BaseModel):
    date: str  # YYYY-MM-DD
    slots: list[SlotInfo]
