from fastapi import APIRouter, HTTPException, Path

from soulchat.models.message import MessageCreate, MessageFeedback, MessageResponse
from soulchat.store import get_store

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.post("", response_model=MessageResponse, status_code=201)
async def create_message(body: MessageCreate):
    doc = await get_store().create_message(
        body.conversation_id,
        body.sender,
        body.content,
        liked=body.liked,
        disliked=body.disliked,
    )
    if not doc:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return doc


@router.patch("/{message_id}/feedback", response_model=MessageResponse)
async def update_feedback(body: MessageFeedback, message_id: int = Path(..., gt=0)):
    doc = await get_store().update_message_feedback(message_id, body.liked, body.disliked)
    if not doc:
        raise HTTPException(status_code=404, detail="Message not found")
    return doc
