"""Tests for relay error classification."""

import pytest

from app.core.errors import (
    DeliveryError,
    DeliveryErrorKind,
    PlatformAPIError,
    TranslationError,
    classify_delivery_error,
)


@pytest.mark.parametrize(
    "code, kind",
    [
        (403, DeliveryErrorKind.BLOCKED),
        (400, DeliveryErrorKind.BAD_REQUEST),
        (500, DeliveryErrorKind.PROVIDER_ERROR),
        (None, DeliveryErrorKind.PROVIDER_ERROR),
    ],
)
def test_classify_delivery_error(code, kind):
    assert classify_delivery_error(code) == kind


def test_blocked_message_and_hint():
    error = DeliveryError.from_platform_error(
        PlatformAPIError("Forbidden", error_code=403)
    )
    assert error.kind == DeliveryErrorKind.BLOCKED
    assert (
        error.message
        == "Bot is blocked by user or user has not started conversation with bot"
    )
    assert "blocked" in error.hint


def test_bad_request_prefers_description():
    error = DeliveryError.from_platform_error(
        PlatformAPIError("raw", error_code=400, description="message text is empty")
    )
    assert error.message == "Invalid request: message text is empty"


def test_other_code_message():
    error = DeliveryError.from_platform_error(PlatformAPIError("Too Many Requests", 429))
    assert error.message == "Telegram API error (429): Too Many Requests"
    assert error.error_code == 429


def test_invalid_destination():
    error = DeliveryError.invalid_destination("abc")
    assert error.kind == DeliveryErrorKind.INVALID_DESTINATION
    assert "abc" in error.message
    assert error.hint


def test_translation_error_hint():
    error = TranslationError("boom")
    assert error.kind == "translation"
    assert str(error) == "boom"
    assert "Translation" in error.hint
