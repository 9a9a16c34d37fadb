from pydantic import Field

from soulchat.models.base import CamelModel
from soulchat.models.message import MessageResponse


class ChatRequest(CamelModel):
    conversation_id: int = Field(..., gt=0, examples=[1])
    message: str = Field(..., min_length=1, examples=["What is the capital of France"])


class ChatResponse(CamelModel):
    user_message: MessageResponse
    ai_message: MessageResponse
