import json
import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lemerle_api.core.errors import StoreError, ValidationError
from lemerle_api.models.service import Service, ServicePublic, ServiceTitles
from lemerle_api.models.testimonial import Testimonial, TestimonialCreate

logger = logging.getLogger(__name__)

MIN_STAR = 1
MAX_STAR = 5


def _parse_features(raw: str | None, service_id: int | None, locale: str) -> list[str]:
    if not raw:
        return []
    try:
        features = json.loads(raw)
    except ValueError:
        logger.warning("Unparseable features_%s for service %s: %r", locale, service_id, raw)
        return []
    if not isinstance(features, list):
        logger.warning("features_%s for service %s is not a list: %r", locale, service_id, raw)
        return []
    return [str(f) for f in features]


def service_to_public(service: Service, locale: str) -> ServicePublic:
    return ServicePublic(
        title=getattr(service, f"title_{locale}"),
        description=getattr(service, f"description_{locale}"),
        image=service.image,
        dateCreation=service.date_creation.date().isoformat(),
        features=_parse_features(getattr(service, f"features_{locale}"), service.id, locale),
    )


async def _all_services(session: AsyncSession) -> list[Service]:
    try:
        result = await session.execute(select(Service).order_by(Service.id))
    except SQLAlchemyError as e:
        logger.exception("Fetching services failed: %s", e)
        raise StoreError() from e
    return list(result.scalars().all())


async def list_service_titles(session: AsyncSession) -> list[ServiceTitles]:
    """Service id and title in every locale, for the booking form's select box."""
    return [
        ServiceTitles(id=s.id, title_fr=s.title_fr, title_en=s.title_en, title_ar=s.title_ar)
        for s in await _all_services(session)
    ]


async def list_services(session: AsyncSession, locale: str) -> list[ServicePublic]:
    return [service_to_public(s, locale) for s in await _all_services(session)]


async def list_testimonials(session: AsyncSession) -> list[Testimonial]:
    try:
        result = await session.execute(select(Testimonial).order_by(Testimonial.id))
    except SQLAlchemyError as e:
        logger.exception("Fetching testimonials failed: %s", e)
        raise StoreError() from e
    return list(result.scalars().all())


async def submit_testimonial(session: AsyncSession, data: TestimonialCreate) -> Testimonial:
    if not data.quote.strip() or not data.author.strip():
        raise ValidationError("testimonial_required")
    if not MIN_STAR <= data.star <= MAX_STAR:
        raise ValidationError("invalid_star")
    testimonial = Testimonial(quote=data.quote.strip(), author=data.author.strip(), star=data.star)
    try:
        session.add(testimonial)
        await session.flush()
    except SQLAlchemyError as e:
        logger.exception("Saving testimonial failed: %s", e)
        raise StoreError() from e
    return testimonial
