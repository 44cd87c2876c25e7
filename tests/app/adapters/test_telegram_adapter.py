"""Tests for TelegramAdapter."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from telegram.error import BadRequest, Forbidden, NetworkError

from app.adapters.telegram import TelegramAdapter, build_telegram_adapter_from_env
from app.core.errors import PlatformAPIError
from app.schemas.relay import DeliveryReceipt
from tests.fixtures.relay_fixtures import FAKE_TOKEN, telegram_update


@pytest.fixture
def telegram_adapter():
    return TelegramAdapter(bot_token=FAKE_TOKEN, webhook_secret=None)


def _adapter_with_bot(send_message) -> tuple[TelegramAdapter, MagicMock]:
    adapter = TelegramAdapter(bot_token=FAKE_TOKEN, timeout_seconds=5)
    mock_bot = MagicMock()
    mock_bot.send_message = send_message
    return adapter, mock_bot


def test_verify_webhook_no_secret(telegram_adapter):
    assert telegram_adapter.verify_webhook(None, {}) is True
    assert (
        telegram_adapter.verify_webhook(None, {"X-Telegram-Bot-Api-Secret-Token": "x"})
        is True
    )


def test_verify_webhook_with_secret():
    adapter = TelegramAdapter(bot_token=FAKE_TOKEN, webhook_secret="secret")
    assert (
        adapter.verify_webhook("secret", {"X-Telegram-Bot-Api-Secret-Token": "secret"})
        is True
    )
    assert (
        adapter.verify_webhook("secret", {"X-Telegram-Bot-Api-Secret-Token": "wrong"})
        is False
    )
    assert adapter.verify_webhook("secret", {}) is False


def test_verify_webhook_falls_back_to_adapter_secret():
    adapter = TelegramAdapter(bot_token=FAKE_TOKEN, webhook_secret="configured")
    assert (
        adapter.verify_webhook(None, {"x-telegram-bot-api-secret-token": "configured"})
        is True
    )
    assert adapter.verify_webhook(None, {}) is False


def test_verify_webhook_case_insensitive_header():
    """Headers are case-insensitive; Starlette/FastAPI lowercases them."""
    adapter = TelegramAdapter(bot_token=FAKE_TOKEN, webhook_secret="my-secret")
    assert (
        adapter.verify_webhook(
            "my-secret", {"x-telegram-bot-api-secret-token": "my-secret"}
        )
        is True
    )
    assert (
        adapter.verify_webhook(
            "my-secret", {"X-TELEGRAM-BOT-API-SECRET-TOKEN": "my-secret"}
        )
        is True
    )


def test_parse_webhook(telegram_adapter):
    event = telegram_adapter.parse_webhook(telegram_update(text="안녕"))
    assert event.chat_id == "42"
    assert event.external_message_id == 456
    assert event.sender_id == 42
    assert event.sender_name == "minji"
    assert event.chat_type == "private"
    assert event.is_private is True
    assert event.text == "안녕"


def test_parse_webhook_name_falls_back_to_first_name(telegram_adapter):
    event = telegram_adapter.parse_webhook(telegram_update(username=None))
    assert event.sender_name == "Minji"


def test_parse_webhook_without_sender(telegram_adapter):
    payload = telegram_update(chat_type="channel")
    del payload["message"]["from"]
    event = telegram_adapter.parse_webhook(payload)
    assert event.sender_id == 0
    assert event.sender_name == "Unknown"
    assert event.is_private is False


def test_parse_webhook_group_chat(telegram_adapter):
    event = telegram_adapter.parse_webhook(telegram_update(chat_type="group"))
    assert event.chat_type == "group"
    assert event.is_private is False


def test_parse_webhook_without_text(telegram_adapter):
    event = telegram_adapter.parse_webhook(telegram_update(text=None))
    assert event.text is None


def test_parse_webhook_no_message_returns_none(telegram_adapter):
    assert telegram_adapter.parse_webhook({"update_id": 123}) is None


@pytest.mark.asyncio
async def test_deliver_returns_receipt():
    """Deliver returns DeliveryReceipt; mocks Bot API to avoid real calls."""
    mock_msg = MagicMock()
    mock_msg.message_id = 42
    adapter, mock_bot = _adapter_with_bot(AsyncMock(return_value=mock_msg))

    with patch.object(adapter, "_get_bot", return_value=mock_bot):
        receipt = await adapter.deliver(789, "안녕하세요")

    assert isinstance(receipt, DeliveryReceipt)
    assert receipt.platform_message_id == 42
    assert receipt.confirmed_at is not None
    mock_bot.send_message.assert_awaited_once_with(chat_id=789, text="안녕하세요")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc, expected_code",
    [
        (Forbidden("Forbidden: bot was blocked by the user"), 403),
        (BadRequest("Bad Request: chat not found"), 400),
        (NetworkError("connection reset"), None),
    ],
)
async def test_deliver_maps_telegram_errors(exc, expected_code):
    adapter, mock_bot = _adapter_with_bot(AsyncMock(side_effect=exc))

    with patch.object(adapter, "_get_bot", return_value=mock_bot):
        with pytest.raises(PlatformAPIError) as exc_info:
            await adapter.deliver(789, "hi")

    assert exc_info.value.error_code == expected_code
    assert exc_info.value.__cause__ is exc


@pytest.mark.asyncio
async def test_deliver_timeout_is_platform_error():
    async def slow_send(**kwargs):
        await asyncio.sleep(1)

    adapter = TelegramAdapter(bot_token=FAKE_TOKEN, timeout_seconds=0.01)
    mock_bot = MagicMock()
    mock_bot.send_message = slow_send

    with patch.object(adapter, "_get_bot", return_value=mock_bot):
        with pytest.raises(PlatformAPIError, match="timed out"):
            await adapter.deliver(789, "hi")


@patch("app.adapters.telegram.get_settings")
def test_build_adapter_disabled(mock_settings):
    mock_settings.return_value.telegram_configured = False
    assert build_telegram_adapter_from_env() is None


@patch("app.adapters.telegram.get_settings")
def test_build_adapter_enabled(mock_settings):
    settings = mock_settings.return_value
    settings.telegram_configured = True
    settings.telegram_bot_token = FAKE_TOKEN
    settings.telegram_webhook_secret = "secret"
    settings.delivery_timeout_seconds = 10
    adapter = build_telegram_adapter_from_env()
    assert isinstance(adapter, TelegramAdapter)
    assert adapter.verify_webhook(None, {"X-Telegram-Bot-Api-Secret-Token": "secret"})
