import datetime as dt

from sqlmodel import Field, SQLModel

from lemerle_api.models.base import created_at_field


class ContactMessageBase(SQLModel):
    name: str
    email: str
    phone: str | None = None
    message: str


class ContactMessage(ContactMessageBase, table=True):
    __tablename__ = "contact"
    id: int | None = Field(default=None, primary_key=True)
    created_at: dt.datetime = created_at_field()


class ContactMessageCreate(ContactMessageBase):
    pass
