from pydantic import BaseModel

from lemerle_api.services.chat_service import ChatMessage


class ChatRequest(BaseModel):
    messages: list[ChatMessage]


class ChatResponse(BaseModel):
    message: str
