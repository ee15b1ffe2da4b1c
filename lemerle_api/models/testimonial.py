import datetime as dt

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from lemerle_api.models.base import created_at_field


class TestimonialBase(SQLModel):
    quote: str
    author: str
    star: int


class Testimonial(TestimonialBase, table=True):
    __tablename__ = "testimonials"
    __table_args__ = (CheckConstraint("star BETWEEN 1 AND 5", name="ck_testimonials_star"),)
    id: int | None = Field(default=None, primary_key=True)
    created_at: dt.datetime = created_at_field()


class TestimonialCreate(TestimonialBase):
    pass


class TestimonialPublic(TestimonialBase):
    pass
