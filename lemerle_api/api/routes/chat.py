from fastapi import APIRouter, Depends

from lemerle_api.api.deps import get_locale
from lemerle_api.api.schemas.chat import ChatRequest, ChatResponse
from lemerle_api.services.chat_service import complete_chat

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def chat(body: ChatRequest, locale: str = Depends(get_locale)) -> ChatResponse:
    reply = await complete_chat(body.messages, locale)
    return ChatResponse(message=reply)
