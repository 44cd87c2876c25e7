"""FastAPI application factory for the translation relay."""

from __future__ import annotations

from typing import Optional

import uvicorn
from fastapi import FastAPI

from app.adapters.base import BasePlatformAdapter, BaseTranslator
from app.adapters.telegram import build_telegram_adapter_from_env
from app.config import Settings, get_settings
from app.core.app_state import AppState
from app.core.store import ConversationStore
from app.infra.logging_config import LoggingConfig, get_logger
from app.routers import messages, translate, webhooks
from app.workers.llm import build_translator_from_env

logger = get_logger(__name__)


def create_app(
    testing: bool = False,
    settings: Optional[Settings] = None,
    store: Optional[ConversationStore] = None,
    translator: Optional[BaseTranslator] = None,
    adapter: Optional[BasePlatformAdapter] = None,
) -> FastAPI:
    """
    Build the application and its collaborators.

    The store is created once here and shared by every request. Pass store,
    translator or adapter to replace the configured ones (tests use stubs).
    When testing, no Telegram adapter is built from the environment.
    """
    settings = settings or get_settings()
    LoggingConfig(settings.log_level)

    if adapter is None and not testing:
        adapter = build_telegram_adapter_from_env()

    app = FastAPI(title=settings.app_name)
    app.state.relay = AppState(
        settings=settings,
        store=store if store is not None else ConversationStore(),
        translator=translator or build_translator_from_env(),
        adapter=adapter,
    )

    app.include_router(webhooks.router)
    app.include_router(messages.router)
    app.include_router(translate.router)

    logger.info(
        "Relay started: %s -> %s, telegram %s",
        settings.source_language.value,
        settings.target_language.value,
        "enabled" if adapter is not None else "disabled",
    )
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=get_settings().port)
