"""
Gateway interfaces.

Adapters encapsulate provider-specific logic. The relay commands only see
these contracts, so tests can swap in stubs without touching process state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from app.schemas.relay import DeliveryReceipt, InboundEvent, Language


class BasePlatformAdapter(ABC):
    """Contract for chat platform adapters (inbound parsing + delivery)."""

    @abstractmethod
    def parse_webhook(self, raw_payload: dict[str, Any]) -> Optional[InboundEvent]:
        """Parse raw webhook payload. Return None for updates without a message; raise if invalid."""
        ...

    @abstractmethod
    async def deliver(self, destination: int, text: str) -> DeliveryReceipt:
        """Send text to destination via the platform API. Raise PlatformAPIError on failure."""
        ...

    def verify_webhook(
        self, secret: Optional[str], request_headers: Optional[dict[str, str]] = None
    ) -> bool:
        """
        Verify webhook request (e.g. secret token). Override if platform supports it.
        Return True if valid or verification not required; False to reject.
        """
        return True


class BaseTranslator(ABC):
    """Contract for translation providers. Single attempt, no retries."""

    @abstractmethod
    async def translate(self, text: str, source: Language, target: Language) -> str:
        """Translate text from source to target. Raise TranslationError on failure."""
        ...
