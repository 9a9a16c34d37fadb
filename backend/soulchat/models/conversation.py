from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, Field

from soulchat.models.base import CamelModel
from soulchat.models.message import MessageResponse


class ConversationCreate(CamelModel):
    title: str = Field(..., min_length=1, examples=["Trip planning"])
    created_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("createdAt", "timestamp", "created_at"),
        description="When the conversation started. Defaults to now.",
    )
    rating: int = Field(default=0, ge=0, le=5)
    feedback: str = ""


class ConversationFeedback(CamelModel):
    rating: int = Field(..., ge=1, le=5, examples=[4])
    feedback: str = Field(..., examples=["Helpful answers, a bit slow."])


class ConversationTitle(CamelModel):
    title: str = Field(..., min_length=1)


class ConversationResponse(CamelModel):
    id: int
    title: str
    created_at: datetime
    rating: int = 0
    feedback: str = ""


class ConversationWithMessages(ConversationResponse):
    messages: list[MessageResponse] = []
