import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lemerle_api.core.errors import StoreError, ValidationError
from lemerle_api.models.contact import ContactMessage, ContactMessageCreate

logger = logging.getLogger(__name__)


async def submit_contact_message(session: AsyncSession, data: ContactMessageCreate) -> ContactMessage:
    if not data.name.strip() or not data.email.strip() or not data.message.strip():
        raise ValidationError("contact_required")
    row = ContactMessage(
        name=data.name.strip(),
        email=data.email.strip(),
        phone=(data.phone or "").strip() or None,
        message=data.message.strip(),
    )
    try:
        session.add(row)
        await session.flush()
    except SQLAlchemyError as e:
        logger.exception("Saving contact message from %s failed: %s", data.email, e)
        raise StoreError() from e
    logger.info("Contact message received from %s", row.email)
    return row
