from fastapi import Depends, HTTPException, Request

from app.adapters.base import BasePlatformAdapter, BaseTranslator
from app.config import Settings
from app.core.app_state import AppState
from app.core.store import ConversationStore


def get_app_state(request: Request) -> AppState:
    """FastAPI dependency returning the collaborators built by create_app."""
    return request.app.state.relay


def get_relay_settings(state: AppState = Depends(get_app_state)) -> Settings:
    return state.settings


def get_store(state: AppState = Depends(get_app_state)) -> ConversationStore:
    return state.store


def get_translator(state: AppState = Depends(get_app_state)) -> BaseTranslator:
    return state.translator


def get_platform_adapter(
    state: AppState = Depends(get_app_state),
) -> BasePlatformAdapter:
    """FastAPI dependency to get the chat platform adapter."""
    if state.adapter is None:
        raise HTTPException(
            status_code=503,
            detail="Telegram integration is not configured or disabled",
        )
    return state.adapter
