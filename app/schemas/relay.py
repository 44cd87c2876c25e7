"""
Message contracts for the translation relay.

Inbound events are normalized by the platform adapter into ``InboundEvent``;
everything the store holds is a ``Message``. Conversations are never stored,
they are computed from messages on every query.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class Language(str, Enum):
    """Languages the relay translates between."""

    KO = "ko"
    EN = "en"

    @property
    def display_name(self) -> str:
        return LANGUAGE_NAMES[self]


LANGUAGE_NAMES = {
    Language.KO: "Korean",
    Language.EN: "English",
}


class Direction(str, Enum):
    """inbound = arrived from the chat platform; outbound = written by the operator."""

    INBOUND = "inbound"
    OUTBOUND = "outbound"


class MessageStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


class InboundEvent(BaseModel):
    """Normalized inbound chat event (adapter → inbound relay)."""

    chat_id: str
    external_message_id: int
    sender_id: int = 0
    sender_name: Optional[str] = None
    chat_type: str
    text: Optional[str] = None

    @property
    def is_private(self) -> bool:
        return self.chat_type == "private"


class DeliveryReceipt(BaseModel):
    """Confirmation returned by the platform after a message was delivered."""

    platform_message_id: int
    confirmed_at: datetime


class MessageDraft(BaseModel):
    """A message before the store assigns its id and created_at."""

    chat_id: str
    external_message_id: int = 0  # 0 for locally recorded failures
    sender_id: int = 0
    sender_name: Optional[str] = None
    direction: Direction
    original_text: str
    translated_text: Optional[str] = None
    language: Language  # language of original_text
    status: MessageStatus = MessageStatus.PENDING
    sent_at: Optional[datetime] = None


class Message(MessageDraft):
    """Stored message. Only status and sent_at change after creation."""

    id: UUID
    created_at: datetime


class Conversation(BaseModel):
    """Per-chat projection over the message log."""

    chat_id: str
    sender_id: int
    sender_name: Optional[str] = None
    last_message: Optional[Message] = None
    message_count: int
    last_activity: datetime


class ReplyRequest(BaseModel):
    """Operator reply body for POST /messages/{chat_id}/reply."""

    text: Optional[str] = None

    @property
    def is_blank(self) -> bool:
        return not self.text or not self.text.strip()


class ReplyResponse(BaseModel):
    success: bool = True
    message: Message


class TranslateRequest(BaseModel):
    """Body for the standalone translate endpoint."""

    text: str = Field(min_length=1)
    from_: Language = Field(alias="from")
    to: Language

    model_config = {"populate_by_name": True}


class TranslateResponse(BaseModel):
    translated: str
