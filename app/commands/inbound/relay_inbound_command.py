"""
Command to relay an inbound chat message into the operator inbox.

Translates the user's text into the operator's language and stores it.
Translation is best-effort: on failure the original text is stored untranslated.
"""

from __future__ import annotations

import logging
from typing import Optional

from app.adapters.base import BaseTranslator
from app.config import Settings, get_settings
from app.core.store import ConversationStore
from app.schemas.relay import (
    Direction,
    InboundEvent,
    Message,
    MessageDraft,
    MessageStatus,
)


class RelayInboundCommand:
    """
    Command to relay one inbound event.
    Only private chats with text are relayed; anything else is ignored.
    """

    def __init__(
        self,
        store: ConversationStore,
        translator: BaseTranslator,
        settings: Optional[Settings] = None,
    ) -> None:
        self.store = store
        self.translator = translator
        self.settings = settings or get_settings()
        self.logger = logging.getLogger(__name__)

    async def execute(self, event: InboundEvent) -> Optional[Message]:
        """
        Translate and store the inbound message.

        Args:
            event: Normalized inbound event from the platform adapter.

        Returns:
            Message: the stored message, or None if the event was ignored.
        """
        if not event.is_private or not event.text:
            self.logger.debug(
                "Ignoring inbound event in chat %s (type=%s, has_text=%s)",
                event.chat_id,
                event.chat_type,
                bool(event.text),
            )
            return None

        self.logger.info(
            "Received message from %s (%s) in chat %s",
            event.sender_name,
            event.sender_id,
            event.chat_id,
        )
        source = self.settings.source_language
        target = self.settings.target_language
        try:
            translated_text = await self.translator.translate(event.text, source, target)
        except Exception as e:
            self.logger.warning(
                "Translation failed for chat %s, storing original text: %s",
                event.chat_id,
                e,
            )
            translated_text = event.text

        return self.store.append(
            MessageDraft(
                chat_id=event.chat_id,
                external_message_id=event.external_message_id,
                sender_id=event.sender_id,
                sender_name=event.sender_name,
                direction=Direction.INBOUND,
                original_text=event.text,
                translated_text=translated_text,
                language=source,
                status=MessageStatus.SENT,
            )
        )
