"""
Webhook routes for inbound chat platform updates.

Telegram POSTs raw updates here; we verify, translate, store, and return 200.
The only authentication is the shared webhook secret header.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from app.commands.webhooks.telegram_command import TelegramWebhookCommand
from app.core.app_state import AppState
from app.routers.utils.dependencies import get_app_state
from app.schemas.telegram import TelegramWebhookUpdate

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post("/telegram")
async def telegram_webhook(
    request: Request,
    body: TelegramWebhookUpdate,
    state: AppState = Depends(get_app_state),
) -> dict[str, str]:
    """
    Receive Telegram webhook updates and relay private text messages to the inbox.
    Validate X-Telegram-Bot-Api-Secret-Token if TELEGRAM_WEBHOOK_SECRET is set.
    """
    command = TelegramWebhookCommand(state)
    return await command.execute(request, body)


@router.get("/telegram")
async def telegram_webhook_status() -> dict[str, str]:
    """Readiness probe used when registering the webhook."""
    return {"message": "Telegram webhook endpoint", "status": "ready"}
