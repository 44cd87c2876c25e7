"""Gateway adapters for chat platforms and translation providers."""

from app.adapters.base import BasePlatformAdapter, BaseTranslator
from app.adapters.telegram import TelegramAdapter

__all__ = ["BasePlatformAdapter", "BaseTranslator", "TelegramAdapter"]
