"""
Command to handle Telegram webhook updates.

Validates the webhook secret, parses the update into an inbound event and
hands it to the inbound relay. Updates the relay does not handle (group chats,
non-text messages, non-message updates) are acknowledged and dropped.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request

from app.commands.inbound.relay_inbound_command import RelayInboundCommand
from app.core.app_state import AppState
from app.schemas.telegram import TelegramWebhookUpdate


class TelegramWebhookCommand:
    """
    Command to handle Telegram webhook updates.
    Validates X-Telegram-Bot-Api-Secret-Token, parses update, relays the message.
    """

    def __init__(self, state: AppState) -> None:
        self.state = state
        self.settings = state.settings
        self._adapter = state.adapter
        self.logger = logging.getLogger(__name__)

    async def execute(
        self, request: Request, body: TelegramWebhookUpdate
    ) -> dict[str, str]:
        """
        Execute the Telegram webhook: validate secret, parse body, relay message.

        Args:
            request: The incoming webhook request (headers for secret validation).
            body: Validated Telegram webhook update payload.

        Returns:
            dict: {"status": "ok"} on success, including ignored updates.

        Raises:
            HTTPException: 503 if Telegram not configured, 403 on invalid secret,
                400 on invalid Telegram update.
        """
        if self._adapter is None:
            raise HTTPException(
                status_code=503,
                detail="Telegram integration is not configured or disabled",
            )
        headers = dict(request.headers) if request.headers else {}
        if not self._adapter.verify_webhook(
            self.settings.telegram_webhook_secret, headers
        ):
            self.logger.warning("Rejected Telegram webhook with invalid secret")
            raise HTTPException(status_code=403, detail="Invalid webhook secret")
        try:
            event = self._adapter.parse_webhook(body.to_payload())
        except (ValueError, KeyError, TypeError) as e:
            self.logger.warning("Telegram webhook parse error: %s", e)
            raise HTTPException(
                status_code=400, detail="Invalid Telegram update"
            ) from e
        if event is None:
            self.logger.debug("Telegram update %s has no message", body.update_id)
            return {"status": "ok"}

        relay = RelayInboundCommand(
            self.state.store, self.state.translator, settings=self.settings
        )
        await relay.execute(event)
        return {"status": "ok"}
