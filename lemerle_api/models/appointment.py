import datetime as dt

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from lemerle_api.models.base import created_at_field


class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    # One booking per slot; a concurrent duplicate fails at insert time
    __table_args__ = (UniqueConstraint("date", "time", name="uq_appointments_date_time"),)

    id: int | None = Field(default=None, primary_key=True)
    name: str
    email: str
    phone: str
    date: dt.date = Field(index=True)
    time: dt.time
    service: str
    message: str | None = None
    locale: str = "fr"
    created_at: dt.datetime = created_at_field()


class AppointmentCreate(SQLModel):
    """Raw submission; date and time are still unparsed strings."""

    name: str
    email: str
    phone: str
    date: str
    time: str
    service: str
    message: str | None = None
    locale: str = "fr"


class AppointmentPublic(SQLModel):
    id: int
    name: str
    email: str
    phone: str
    date: dt.date
    time: dt.time
    service: str
    message: str | None = None
    created_at: dt.datetime
