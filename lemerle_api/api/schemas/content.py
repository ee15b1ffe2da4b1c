from pydantic import BaseModel, EmailStr

from lemerle_api.models.service import ServicePublic
from lemerle_api.models.testimonial import TestimonialPublic


class ServicesResponse(BaseModel):
    title: str
    subtitle: str
    services: list[ServicePublic]


class TestimonialsResponse(BaseModel):
    title: str
    subtitle: str
    items: list[TestimonialPublic]


class ReviewRequest(BaseModel):
    quote: str
    author: str
    star: int


class ContactRequest(BaseModel):
    name: str
    email: EmailStr
    phone: str | None = None
    message: str


class SubmissionResponse(BaseModel):
    success: bool = True
