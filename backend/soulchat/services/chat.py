import logging

from soulchat.services.request_guard import (
    DuplicateRequestError,
    DuplicateRequestGuard,
    request_key,
)
from soulchat.services.search_gateway import SearchGateway
from soulchat.services.synthesizer import ResponseSynthesizer
from soulchat.store import get_store

logger = logging.getLogger(__name__)

_guard = DuplicateRequestGuard()


class ConversationNotFoundError(LookupError):
    pass


def get_guard() -> DuplicateRequestGuard:
    return _guard


def build_synthesizer() -> ResponseSynthesizer:
    return ResponseSynthesizer(SearchGateway.from_settings())


async def chat(conversation_id: int, message: str) -> dict:
    """Store the user's message, compose a reply and store that too.

    Duplicates are refused twice over: an identical request still in flight is
    caught by the guard, and an identical user message already stored in the
    conversation (for example from before a restart) is caught by the store
    lookup. Both raise DuplicateRequestError.
    """
    key = request_key(conversation_id, message)
    with _guard.hold(key):
        store = get_store()

        conversation = await store.get_conversation(conversation_id)
        if conversation is None:
            known = [c["id"] for c in await store.get_all_conversations()]
            logger.info(
                "Conversation %s not found (available: %s)", conversation_id, known
            )
            raise ConversationNotFoundError(f"Conversation {conversation_id} not found")

        if await store.has_user_message(conversation_id, message):
            logger.info(
                "Duplicate message content in conversation %s, ignoring: %r",
                conversation_id, message,
            )
            raise DuplicateRequestError(
                "This exact message already exists in the conversation"
            )

        user_message = await store.create_message(conversation_id, "user", message)
        reply = await build_synthesizer().synthesize(message)
        ai_message = await store.create_message(conversation_id, "ai", reply)
        if user_message is None or ai_message is None:
            # Deleted while the reply was being composed.
            raise ConversationNotFoundError(f"Conversation {conversation_id} not found")

    return {"user_message": user_message, "ai_message": ai_message}
