"""
Operator inbox API: list conversations and messages, send replies.

Thin wrappers around ConversationService and SendReplyCommand. Relay errors
are turned into HTTP errors here with a diagnostic hint for the operator.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.adapters.base import BasePlatformAdapter, BaseTranslator
from app.commands.outbound.send_reply_command import SendReplyCommand
from app.config import Settings
from app.core.errors import DeliveryError, DeliveryErrorKind, RelayError, TranslationError
from app.core.store import ConversationStore
from app.infra.logging_config import get_logger
from app.routers.utils.dependencies import (
    get_platform_adapter,
    get_relay_settings,
    get_store,
    get_translator,
)
from app.schemas.relay import ReplyRequest, ReplyResponse
from app.services.conversation_service import ConversationService

logger = get_logger(__name__)

router = APIRouter(prefix="/messages", tags=["messages"])


def _relay_error_detail(error: RelayError, kind: str) -> dict[str, Any]:
    return {
        "error": "Failed to send message",
        "message": error.message,
        "kind": kind,
        "hint": error.hint,
    }


@router.get("", response_model=dict[str, Any])
def list_conversations_or_messages(
    chat_id: Optional[str] = Query(None),
    store: ConversationStore = Depends(get_store),
) -> dict[str, Any]:
    """All conversations, most recent first; or one chat's messages with ?chat_id=."""
    service = ConversationService(store)
    if chat_id:
        return {"messages": service.list_messages(chat_id)}
    return {"conversations": service.list_conversations()}


@router.delete("", response_model=dict[str, str])
def reset_messages(
    store: ConversationStore = Depends(get_store),
) -> dict[str, str]:
    """Discard the in-memory inbox."""
    store.reset()
    logger.info("Conversation store reset")
    return {"status": "ok"}


@router.get("/{chat_id}", response_model=dict[str, Any])
def list_messages(
    chat_id: str,
    store: ConversationStore = Depends(get_store),
) -> dict[str, Any]:
    """Messages of one chat, oldest first. Unknown chat returns an empty list."""
    return {"messages": ConversationService(store).list_messages(chat_id)}


@router.post("/{chat_id}/reply", response_model=ReplyResponse)
async def send_reply(
    chat_id: str,
    body: ReplyRequest,
    store: ConversationStore = Depends(get_store),
    translator: BaseTranslator = Depends(get_translator),
    adapter: BasePlatformAdapter = Depends(get_platform_adapter),
    settings: Settings = Depends(get_relay_settings),
) -> ReplyResponse:
    """Translate the operator reply, deliver it to the chat, and record it."""
    if body.is_blank:
        raise HTTPException(
            status_code=400, detail={"error": "Message text is required"}
        )
    command = SendReplyCommand(store, translator, adapter, settings=settings)
    try:
        message = await command.execute(chat_id, body.text)
    except TranslationError as e:
        raise HTTPException(
            status_code=502, detail=_relay_error_detail(e, e.kind)
        ) from e
    except DeliveryError as e:
        status_code = 400 if e.kind == DeliveryErrorKind.INVALID_DESTINATION else 502
        raise HTTPException(
            status_code=status_code, detail=_relay_error_detail(e, e.kind.value)
        ) from e
    return ReplyResponse(success=True, message=message)
