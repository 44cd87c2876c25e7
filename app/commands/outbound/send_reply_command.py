"""
Command to send an operator reply to a chat.

Translates the reply into the chat user's language, delivers it via the
platform adapter, and records the attempt. Each step gates the next:
a translation failure sends and stores nothing; a delivery failure is stored
as a failed message before the error is raised.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from app.adapters.base import BasePlatformAdapter, BaseTranslator
from app.config import Settings, get_settings
from app.core.errors import DeliveryError, PlatformAPIError, TranslationError
from app.core.store import ConversationStore
from app.schemas.relay import Direction, Message, MessageDraft, MessageStatus

# Canonical Telegram chat id as stored by the inbound relay; negative for groups.
CHAT_ID_PATTERN = re.compile(r"-?[1-9][0-9]*")


class SendReplyCommand:
    """
    Command to translate and deliver an operator reply.
    Stores the outbound message as sent, or as failed for audit.
    """

    def __init__(
        self,
        store: ConversationStore,
        translator: BaseTranslator,
        adapter: BasePlatformAdapter,
        settings: Optional[Settings] = None,
    ) -> None:
        self.store = store
        self.translator = translator
        self.adapter = adapter
        self.settings = settings or get_settings()
        self.logger = logging.getLogger(__name__)

    async def execute(self, chat_id: str, text: str) -> Message:
        """
        Translate, deliver and record an operator reply.

        Args:
            chat_id: Conversation key (Telegram chat id as string).
            text: Operator-authored text in the target language.

        Returns:
            Message: the stored outbound message, status sent with sent_at set.

        Raises:
            TranslationError: translation failed; nothing was sent or stored.
            DeliveryError: chat id invalid or platform rejected the send;
                a failed message was stored.
        """
        source = self.settings.source_language
        target = self.settings.target_language

        self.logger.info("Translating reply for chat %s", chat_id)
        try:
            translated_text = await self.translator.translate(text, target, source)
        except TranslationError as e:
            self.logger.error("Translation failed for chat %s: %s", chat_id, e.message)
            raise TranslationError(f"Translation failed: {e.message}") from e
        except Exception as e:
            self.logger.error("Translation failed for chat %s: %s", chat_id, e)
            raise TranslationError(f"Translation failed: {e}") from e

        if not CHAT_ID_PATTERN.fullmatch(chat_id):
            self.logger.error("Cannot deliver to non-numeric chat id %r", chat_id)
            self._record_failure(chat_id, 0, text, translated_text)
            raise DeliveryError.invalid_destination(chat_id)
        destination = int(chat_id)

        self.logger.info("Delivering reply to chat %s", destination)
        try:
            receipt = await self.adapter.deliver(destination, translated_text)
        except Exception as e:
            error = (
                e
                if isinstance(e, PlatformAPIError)
                else PlatformAPIError(str(e), error_code=getattr(e, "error_code", None))
            )
            self.logger.error(
                "Delivery to chat %s failed: %s (error_code=%s, description=%s)",
                destination,
                error.message,
                error.error_code,
                error.description,
            )
            self._record_failure(chat_id, destination, text, translated_text)
            raise DeliveryError.from_platform_error(error) from e

        stored = self.store.append(
            MessageDraft(
                chat_id=chat_id,
                external_message_id=receipt.platform_message_id,
                sender_id=destination,
                direction=Direction.OUTBOUND,
                original_text=text,
                translated_text=translated_text,
                language=target,
                status=MessageStatus.SENT,
            )
        )
        updated = self.store.update_status(
            stored.id, MessageStatus.SENT, sent_at=receipt.confirmed_at
        )
        self.logger.info(
            "Reply delivered to chat %s as message %s",
            destination,
            receipt.platform_message_id,
        )
        return updated or stored

    def _record_failure(
        self, chat_id: str, sender_id: int, text: str, translated_text: str
    ) -> Message:
        return self.store.append(
            MessageDraft(
                chat_id=chat_id,
                external_message_id=0,
                sender_id=sender_id,
                direction=Direction.OUTBOUND,
                original_text=text,
                translated_text=translated_text,
                language=self.settings.target_language,
                status=MessageStatus.FAILED,
            )
        )
