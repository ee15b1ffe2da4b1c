from lemerle_api.models.appointment import Appointment, AppointmentCreate, AppointmentPublic
from lemerle_api.models.contact import ContactMessage, ContactMessageCreate
from lemerle_api.models.service import Service, ServicePublic, ServiceTitles
from lemerle_api.models.testimonial import Testimonial, TestimonialCreate, TestimonialPublic

__all__ = [
    "Appointment",
    "AppointmentCreate",
    "AppointmentPublic",
    "ContactMessage",
    "ContactMessageCreate",
    "Service",
    "ServicePublic",
    "ServiceTitles",
    "Testimonial",
    "TestimonialCreate",
    "TestimonialPublic",
]
