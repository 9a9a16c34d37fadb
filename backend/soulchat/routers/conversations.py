from fastapi import APIRouter, HTTPException, Path

from soulchat.models.conversation import (
    ConversationCreate,
    ConversationFeedback,
    ConversationResponse,
    ConversationTitle,
    ConversationWithMessages,
)
from soulchat.store import get_store

router = APIRouter(prefix="/api/conversations", tags=["conversations"])


@router.get("", response_model=list[ConversationResponse])
async def list_conversations():
    return await get_store().get_all_conversations()


@router.get("/rating/{rating}", response_model=list[ConversationResponse])
async def list_conversations_by_rating(rating: int = Path(..., ge=1, le=5)):
    return await get_store().get_conversations_by_rating(rating)


@router.get("/{conversation_id}", response_model=ConversationWithMessages)
async def get_conversation(conversation_id: int = Path(..., gt=0)):
    doc = await get_store().get_conversation_with_messages(conversation_id)
    if not doc:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return doc


@router.post("", response_model=ConversationResponse, status_code=201)
async def create_conversation(body: ConversationCreate):
    return await get_store().create_conversation(
        title=body.title,
        created_at=body.created_at,
        rating=body.rating,
        feedback=body.feedback,
    )


@router.patch("/{conversation_id}/feedback", response_model=ConversationResponse)
async def update_feedback(body: ConversationFeedback, conversation_id: int = Path(..., gt=0)):
    doc = await get_store().update_conversation_feedback(
        conversation_id, body.rating, body.feedback
    )
    if not doc:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return doc


@router.patch("/{conversation_id}/title", response_model=ConversationResponse)
async def update_title(body: ConversationTitle, conversation_id: int = Path(..., gt=0)):
    doc = await get_store().update_conversation_title(conversation_id, body.title)
    if not doc:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return doc


@router.delete("/{conversation_id}")
async def delete_conversation(conversation_id: int = Path(..., gt=0)):
    if not await get_store().delete_conversation(conversation_id):
        raise HTTPException(status_code=404, detail="Conversation not found")
    return {"message": "Conversation deleted successfully"}
