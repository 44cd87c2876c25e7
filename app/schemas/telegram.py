"""
Telegram webhook payload schemas.

Matches the structure Telegram sends to webhook endpoints. Only message
updates are modelled; other update kinds (edited_message, callback_query, ...)
validate with ``message=None`` and are ignored by the relay.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class TelegramUser(BaseModel):
    """Telegram user (message.from)."""

    id: int
    is_bot: bool = False
    first_name: str
    last_name: Optional[str] = None
    username: Optional[str] = None
    language_code: Optional[str] = None


class TelegramChat(BaseModel):
    """Telegram chat (message.chat). type is private, group, supergroup or channel."""

    id: int
    type: str
    title: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class TelegramMessage(BaseModel):
    """Telegram message (update.message). Channel posts carry no sender."""

    message_id: int
    from_: Optional[TelegramUser] = Field(default=None, alias="from")
    chat: TelegramChat
    date: int
    text: Optional[str] = None

    model_config = {"populate_by_name": True}


class TelegramWebhookUpdate(BaseModel):
    """Telegram webhook update payload (root object)."""

    update_id: int
    message: Optional[TelegramMessage] = None

    def to_payload(self) -> dict:
        """Dump back to Telegram's wire shape (``from`` key, no nulls)."""
        return self.model_dump(by_alias=True, exclude_none=True)
