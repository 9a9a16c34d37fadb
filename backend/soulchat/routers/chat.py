import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from soulchat.models.chat import ChatRequest, ChatResponse
from soulchat.services.chat import ConversationNotFoundError, chat
from soulchat.services.request_guard import DuplicateRequestError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def chat_endpoint(body: ChatRequest):
    logger.info("Chat request: conversation=%s message=%r", body.conversation_id, body.message)
    try:
        return await chat(body.conversation_id, body.message)
    except ConversationNotFoundError:
        raise HTTPException(status_code=404, detail="Conversation not found")
    except DuplicateRequestError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.exception("Chat message error")
        return JSONResponse(
            status_code=500,
            content={"message": "Failed to process chat message", "error": str(e)},
        )
