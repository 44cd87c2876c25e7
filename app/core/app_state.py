from __future__ import annotations

from typing import Optional

from app.adapters.base import BasePlatformAdapter, BaseTranslator
from app.config import Settings
from app.core.store import ConversationStore


class AppState:
    """Process-wide collaborators, built once in create_app and attached to app.state."""

    def __init__(
        self,
        settings: Settings,
        store: ConversationStore,
        translator: BaseTranslator,
        adapter: Optional[BasePlatformAdapter] = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.translator = translator
        self.adapter = adapter
