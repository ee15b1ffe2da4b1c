from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from lemerle_api.api.deps import get_session
from lemerle_api.api.schemas.content import ContactRequest, SubmissionResponse
from lemerle_api.models.contact import ContactMessageCreate
from lemerle_api.services.contact_service import submit_contact_message

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
async def contact(
    body: ContactRequest,
    session: AsyncSession = Depends(get_session),
) -> SubmissionResponse:
    await submit_contact_message(
        session,
        ContactMessageCreate(name=body.name, email=body.email, phone=body.phone, message=body.message),
    )
    return SubmissionResponse()
