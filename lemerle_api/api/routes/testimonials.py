from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from lemerle_api.api.deps import get_locale, get_session
from lemerle_api.api.schemas.content import ReviewRequest, SubmissionResponse, TestimonialsResponse
from lemerle_api.core.i18n import translate
from lemerle_api.models.testimonial import TestimonialCreate, TestimonialPublic
from lemerle_api.services.content_service import list_testimonials, submit_testimonial

router = APIRouter(prefix="/testimonials", tags=["content"])


@router.get("", response_model=TestimonialsResponse)
async def testimonials(
    session: AsyncSession = Depends(get_session),
    locale: str = Depends(get_locale),
) -> TestimonialsResponse:
    rows = await list_testimonials(session)
    return TestimonialsResponse(
        title=translate("testimonials_title", locale),
        subtitle=translate("testimonials_subtitle", locale),
        items=[TestimonialPublic(quote=t.quote, author=t.author, star=t.star) for t in rows],
    )


@router.post("", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
async def submit_review(
    body: ReviewRequest,
    session: AsyncSession = Depends(get_session),
) -> SubmissionResponse:
    await submit_testimonial(session, TestimonialCreate(quote=body.quote, author=body.author, star=body.star))
    return SubmissionResponse()
