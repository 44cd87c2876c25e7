"""Relay error classification.

Gateways raise ``TranslationError`` (translator) and ``PlatformAPIError``
(chat platform). The outbound relay turns platform failures into a classified
``DeliveryError`` so callers can show the operator what went wrong:

- BLOCKED: recipient blocked the bot or never started it (403)
- BAD_REQUEST: platform rejected the request (400)
- PROVIDER_ERROR: any other platform failure, with or without a code
- INVALID_DESTINATION: chat id cannot be resolved to a numeric destination
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class RelayError(Exception):
    """Base for errors surfaced at the relay operation boundary."""

    hint: str = "Check server logs for details"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TranslationError(RelayError):
    """Translation provider unreachable, unauthorized, timed out or empty."""

    kind = "translation"
    hint = "Translation error - check the translation provider API key and quota"


class PlatformAPIError(Exception):
    """Raw failure from the chat platform API.

    Attributes:
        error_code: Provider error code (Telegram uses HTTP-like codes), if any
        description: Provider error description, if any
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        description: Optional[str] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.description = description
        super().__init__(message)


class DeliveryErrorKind(str, Enum):
    BLOCKED = "blocked"
    BAD_REQUEST = "bad_request"
    PROVIDER_ERROR = "provider_error"
    INVALID_DESTINATION = "invalid_destination"


DELIVERY_HINTS = {
    DeliveryErrorKind.BLOCKED: (
        "Telegram error - user may have blocked the bot or not started "
        "a conversation with it"
    ),
    DeliveryErrorKind.BAD_REQUEST: "Telegram rejected the request - check the message text",
    DeliveryErrorKind.PROVIDER_ERROR: "Telegram API error - check the bot token and Telegram status",
    DeliveryErrorKind.INVALID_DESTINATION: "Chat id is not a numeric Telegram chat id",
}


class DeliveryError(RelayError):
    """Outbound delivery did not succeed. The attempt is recorded as failed."""

    def __init__(
        self,
        kind: DeliveryErrorKind,
        message: str,
        error_code: Optional[int] = None,
    ) -> None:
        self.kind = kind
        self.error_code = error_code
        super().__init__(message)

    @property
    def hint(self) -> str:  # type: ignore[override]
        return DELIVERY_HINTS[self.kind]

    @classmethod
    def from_platform_error(cls, error: PlatformAPIError) -> "DeliveryError":
        """Build a classified delivery error from a raw platform failure."""
        kind = classify_delivery_error(error.error_code)
        detail = error.description or error.message
        if kind == DeliveryErrorKind.BLOCKED:
            message = (
                "Bot is blocked by user or user has not started conversation with bot"
            )
        elif kind == DeliveryErrorKind.BAD_REQUEST:
            message = f"Invalid request: {detail}"
        elif error.error_code is not None:
            message = f"Telegram API error ({error.error_code}): {detail}"
        else:
            message = f"Failed to send Telegram message: {error.message}"
        return cls(kind, message, error_code=error.error_code)

    @classmethod
    def invalid_destination(cls, chat_id: str) -> "DeliveryError":
        return cls(
            DeliveryErrorKind.INVALID_DESTINATION,
            f"Invalid chat_id format: {chat_id}. Expected a number.",
        )


def classify_delivery_error(error_code: Optional[int]) -> DeliveryErrorKind:
    """Classify a platform error code into a delivery error kind."""
    if error_code == 403:
        return DeliveryErrorKind.BLOCKED
    if error_code == 400:
        return DeliveryErrorKind.BAD_REQUEST
    return DeliveryErrorKind.PROVIDER_ERROR
