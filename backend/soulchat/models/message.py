from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from soulchat.models.base import CamelModel

Sender = Literal["user", "ai"]


class MessageCreate(CamelModel):
    conversation_id: int = Field(..., gt=0, examples=[1])
    sender: Sender
    content: str = Field(..., min_length=1, examples=["What is the capital of France?"])
    liked: bool = False
    disliked: bool = False


class MessageFeedback(CamelModel):
    # The two flags are independent; setting one does not clear the other.
    liked: Optional[bool] = None
    disliked: Optional[bool] = None


class MessageResponse(CamelModel):
    id: int
    conversation_id: int
    sender: Sender
    content: str
    created_at: datetime
    liked: Optional[bool] = None
    disliked: Optional[bool] = None
