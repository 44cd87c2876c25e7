"""
In-memory conversation store.

Append-only message log plus a per-chat grouping. Held in process memory only;
a restart loses all history. Every operation runs under a single lock so
concurrent inbound and outbound traffic cannot tear the grouping, and reads
return copies so callers never see a half-applied append.
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from app.schemas.relay import Conversation, Message, MessageDraft, MessageStatus


class ConversationStore:
    """Owns every Message. Conversations are derived on each query."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._messages: list[Message] = []
        self._by_id: dict[UUID, Message] = {}
        self._by_chat: dict[str, list[Message]] = {}
        self._last_created_at: Optional[datetime] = None

    def _now(self) -> datetime:
        # created_at never goes backwards in insertion order, even if the clock does
        now = datetime.now(timezone.utc)
        if self._last_created_at is not None and now < self._last_created_at:
            now = self._last_created_at
        self._last_created_at = now
        return now

    def append(self, draft: MessageDraft) -> Message:
        """Assign id and created_at, add to the log and the chat grouping."""
        with self._lock:
            message = Message(
                **draft.model_dump(),
                id=uuid.uuid4(),
                created_at=self._now(),
            )
            self._messages.append(message)
            self._by_id[message.id] = message
            self._by_chat.setdefault(message.chat_id, []).append(message)
            return message.model_copy()

    def get(self, message_id: UUID) -> Optional[Message]:
        with self._lock:
            message = self._by_id.get(message_id)
            return message.model_copy() if message is not None else None

    def messages_for(self, chat_id: str) -> list[Message]:
        """Messages of one chat in append order. Unknown chat yields []."""
        with self._lock:
            return [m.model_copy() for m in self._by_chat.get(chat_id, [])]

    def all_conversations(self) -> list[Conversation]:
        """One Conversation per chat, most recently active first."""
        with self._lock:
            groups = [
                (chat_id, [m.model_copy() for m in msgs])
                for chat_id, msgs in self._by_chat.items()
                if msgs
            ]
        conversations = []
        for chat_id, msgs in groups:
            ordered = sorted(msgs, key=lambda m: m.created_at)
            first, last = ordered[0], ordered[-1]
            conversations.append(
                Conversation(
                    chat_id=chat_id,
                    sender_id=first.sender_id,
                    sender_name=first.sender_name,
                    last_message=last,
                    message_count=len(ordered),
                    last_activity=last.created_at,
                )
            )
        # Stable sort: ties keep first-seen chat order
        conversations.sort(key=lambda c: c.last_activity, reverse=True)
        return conversations

    def update_status(
        self,
        message_id: UUID,
        status: MessageStatus,
        sent_at: Optional[datetime] = None,
    ) -> Optional[Message]:
        """Set status (and sent_at when given) in place. Unknown id returns None."""
        with self._lock:
            message = self._by_id.get(message_id)
            if message is None:
                return None
            message.status = status
            if sent_at is not None:
                message.sent_at = sent_at
            return message.model_copy()

    def reset(self) -> None:
        """Discard all messages and groupings."""
        with self._lock:
            self._messages.clear()
            self._by_id.clear()
            self._by_chat.clear()
            self._last_created_at = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)
