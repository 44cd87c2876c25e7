"""
Read-only views over the conversation store for the operator inbox.

No side effects; every call recomputes from the message log.
"""

from __future__ import annotations

from typing import List

from app.core.store import ConversationStore
from app.schemas.relay import Conversation, Message


class ConversationService:
    """List conversations and messages. Never mutates the store."""

    def __init__(self, store: ConversationStore) -> None:
        self.store = store

    def list_conversations(self) -> List[Conversation]:
        """Conversations ordered by last activity, most recent first."""
        return self.store.all_conversations()

    def list_messages(self, chat_id: str) -> List[Message]:
        """Messages of one chat ordered by created_at ascending. Unknown chat yields []."""
        return sorted(self.store.messages_for(chat_id), key=lambda m: m.created_at)
