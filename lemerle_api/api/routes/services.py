from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lemerle_api.api.deps import get_locale, get_session
from lemerle_api.api.schemas.content import ServicesResponse
from lemerle_api.core.i18n import translate
from lemerle_api.services.content_service import list_services

router = APIRouter(prefix="/services", tags=["content"])


@router.get("", response_model=ServicesResponse)
async def services(
    session: AsyncSession = Depends(get_session),
    locale: str = Depends(get_locale),
) -> ServicesResponse:
    return ServicesResponse(
        title=translate("services_title", locale),
        subtitle=translate("services_subtitle", locale),
        services=await list_services(session, locale),
    )
