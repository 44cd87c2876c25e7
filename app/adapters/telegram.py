"""
Telegram platform adapter.

Uses python-telegram-bot for parsing webhook payloads and sending messages.
The Bot handle is created on first use and reused for the process lifetime.
"""

from __future__ import annotations

import asyncio
import secrets
from datetime import datetime, timezone
from typing import Any, Optional

from telegram import Bot, Update
from telegram.error import BadRequest, Forbidden, TelegramError

from app.adapters.base import BasePlatformAdapter
from app.config import get_settings
from app.core.errors import PlatformAPIError
from app.infra.logging_config import get_logger
from app.schemas.relay import DeliveryReceipt, InboundEvent

logger = get_logger(__name__)

UNKNOWN_SENDER_NAME = "Unknown"


class TelegramAdapter(BasePlatformAdapter):
    """Telegram adapter: parse webhook updates, deliver messages via Bot API."""

    TELEGRAM_SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"

    def __init__(
        self,
        bot_token: str,
        webhook_secret: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self._bot_token = bot_token
        self._webhook_secret = webhook_secret
        self._timeout_seconds = timeout_seconds
        self._bot: Optional[Bot] = None

    def _get_bot(self) -> Bot:
        if self._bot is None:
            self._bot = Bot(token=self._bot_token)
        return self._bot

    def verify_webhook(
        self, secret: Optional[str], request_headers: Optional[dict[str, str]] = None
    ) -> bool:
        """Validate X-Telegram-Bot-Api-Secret-Token if webhook secret is configured."""
        expected = secret or self._webhook_secret
        if not expected:
            return True
        request_headers = request_headers or {}
        header_lower = self.TELEGRAM_SECRET_HEADER.lower()
        actual = None
        for key, value in request_headers.items():
            if key.lower() == header_lower:
                actual = value
                break
        if actual is None:
            return False
        return secrets.compare_digest(actual, expected)

    def parse_webhook(self, raw_payload: dict[str, Any]) -> Optional[InboundEvent]:
        """Parse Telegram webhook payload into a normalized inbound event."""
        update = Update.de_json(raw_payload, self._get_bot())
        if update is None:
            raise ValueError("Invalid Telegram update: de_json returned None")
        msg = update.message
        if msg is None:
            return None
        from_user = msg.from_user
        if from_user is not None:
            sender_id = from_user.id
            sender_name = (
                from_user.username or from_user.first_name or UNKNOWN_SENDER_NAME
            )
        else:
            sender_id = 0
            sender_name = UNKNOWN_SENDER_NAME
        return InboundEvent(
            chat_id=str(msg.chat.id),
            external_message_id=msg.message_id,
            sender_id=sender_id,
            sender_name=sender_name,
            chat_type=str(msg.chat.type),
            text=msg.text,
        )

    async def deliver(self, destination: int, text: str) -> DeliveryReceipt:
        """Send a message via Telegram Bot API. destination = numeric chat_id."""
        try:
            sent = await asyncio.wait_for(
                self._get_bot().send_message(chat_id=destination, text=text),
                timeout=self._timeout_seconds,
            )
        except Forbidden as e:
            raise PlatformAPIError(str(e), error_code=403, description=e.message) from e
        except BadRequest as e:
            raise PlatformAPIError(str(e), error_code=400, description=e.message) from e
        except TelegramError as e:
            raise PlatformAPIError(str(e), description=e.message) from e
        except asyncio.TimeoutError as e:
            raise PlatformAPIError(
                f"Telegram send timed out after {self._timeout_seconds}s"
            ) from e
        return DeliveryReceipt(
            platform_message_id=sent.message_id,
            confirmed_at=datetime.now(timezone.utc),
        )


def build_telegram_adapter_from_env() -> Optional[TelegramAdapter]:
    """Return configured TelegramAdapter or None if Telegram is disabled."""
    settings = get_settings()
    if not settings.telegram_configured:
        logger.info("Telegram integration disabled or TELEGRAM_BOT_TOKEN not set")
        return None
    return TelegramAdapter(
        bot_token=settings.telegram_bot_token,
        webhook_secret=settings.telegram_webhook_secret,
        timeout_seconds=settings.delivery_timeout_seconds,
    )
