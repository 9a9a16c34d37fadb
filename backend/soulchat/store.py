"""In-memory conversation store.

Conversations and messages live in plain dicts keyed by integer ids handed out
from per-kind counters, so an id is never reused even after a delete. Every
method returns copies; mutate through the update methods only.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ConversationStore:
    def __init__(self):
        self._conversations: dict[int, dict] = {}
        self._messages: dict[int, dict] = {}
        self._next_conversation_id = 1
        self._next_message_id = 1

    # Conversations

    async def create_conversation(
        self,
        title: str,
        created_at: Optional[datetime] = None,
        rating: int = 0,
        feedback: str = "",
    ) -> dict:
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        conversation_id = self._next_conversation_id
        self._next_conversation_id += 1
        doc = {
            "id": conversation_id,
            "title": title,
            "created_at": created_at or _now(),
            "rating": rating or 0,
            "feedback": feedback or "",
        }
        self._conversations[conversation_id] = doc
        return dict(doc)

    async def get_conversation(self, conversation_id: int) -> Optional[dict]:
        doc = self._conversations.get(conversation_id)
        return dict(doc) if doc else None

    async def get_all_conversations(self) -> list[dict]:
        """Newest first."""
        docs = sorted(
            self._conversations.values(),
            key=lambda c: (c["created_at"], c["id"]),
            reverse=True,
        )
        return [dict(d) for d in docs]

    async def get_conversations_by_rating(self, rating: int) -> list[dict]:
        return [c for c in await self.get_all_conversations() if c["rating"] == rating]

    async def get_conversation_with_messages(self, conversation_id: int) -> Optional[dict]:
        doc = await self.get_conversation(conversation_id)
        if doc is None:
            return None
        messages = await self.get_messages_by_conversation_id(conversation_id)
        doc["messages"] = sorted(messages, key=lambda m: (m["created_at"], m["id"]))
        return doc

    async def update_conversation_feedback(
        self, conversation_id: int, rating: int, feedback: str
    ) -> Optional[dict]:
        # Rating and feedback may be overwritten any number of times.
        doc = self._conversations.get(conversation_id)
        if doc is None:
            return None
        doc["rating"] = rating
        doc["feedback"] = feedback
        return dict(doc)

    async def update_conversation_title(self, conversation_id: int, title: str) -> Optional[dict]:
        doc = self._conversations.get(conversation_id)
        if doc is None:
            return None
        doc["title"] = title
        return dict(doc)

    async def delete_conversation(self, conversation_id: int) -> bool:
        if conversation_id not in self._conversations:
            return False
        for message_id in [
            m["id"] for m in self._messages.values() if m["conversation_id"] == conversation_id
        ]:
            del self._messages[message_id]
        del self._conversations[conversation_id]
        return True

    # Messages

    async def create_message(
        self,
        conversation_id: int,
        sender: str,
        content: str,
        liked: bool = False,
        disliked: bool = False,
    ) -> Optional[dict]:
        """Returns None when the conversation does not exist."""
        if conversation_id not in self._conversations:
            return None
        message_id = self._next_message_id
        self._next_message_id += 1
        doc = {
            "id": message_id,
            "conversation_id": conversation_id,
            "sender": sender,
            "content": content,
            "created_at": _now(),
            "liked": liked,
            "disliked": disliked,
        }
        self._messages[message_id] = doc
        return dict(doc)

    async def get_messages_by_conversation_id(self, conversation_id: int) -> list[dict]:
        return [
            dict(m) for m in self._messages.values() if m["conversation_id"] == conversation_id
        ]

    async def has_user_message(self, conversation_id: int, content: str) -> bool:
        return any(
            m["conversation_id"] == conversation_id
            and m["sender"] == "user"
            and m["content"] == content
            for m in self._messages.values()
        )

    async def update_message_feedback(
        self,
        message_id: int,
        liked: Optional[bool] = None,
        disliked: Optional[bool] = None,
    ) -> Optional[dict]:
        """Flags left as None keep their current value."""
        doc = self._messages.get(message_id)
        if doc is None:
            return None
        if liked is not None:
            doc["liked"] = liked
        if disliked is not None:
            doc["disliked"] = disliked
        return dict(doc)

    async def seed(self) -> None:
        """Create the welcome conversation shown on first launch."""
        conversation = await self.create_conversation("Welcome Conversation")
        await self.create_message(conversation["id"], "user", "Hello, I'm new here!")
        await self.create_message(
            conversation["id"],
            "ai",
            "Welcome! I'm your AI assistant. I can help you find information, "
            "answer questions, and more. Try asking me something!",
        )
        logger.info("Seeded welcome conversation id=%s", conversation["id"])


store: ConversationStore = None  # type: ignore[assignment]


def get_store() -> ConversationStore:
    return store


async def connect(seed: bool = False) -> ConversationStore:
    global store
    store = ConversationStore()
    if seed:
        await store.seed()
    return store


async def close():
    global store
    store = None
