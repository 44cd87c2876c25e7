from __future__ import annotations

import asyncio
from typing import Dict, Optional, Tuple

from pydantic_ai import Agent
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.litellm import LiteLLMProvider
from pydantic_ai.settings import ModelSettings

from app.adapters.base import BaseTranslator
from app.config import get_settings
from app.constants.default_system_prompt import DefaultSystemPrompt
from app.core.errors import TranslationError
from app.infra.logging_config import get_logger
from app.schemas.relay import Language

logger = get_logger(__name__)


class LLMTranslator(BaseTranslator):
    """Translate through a chat model. One agent per language direction, built on first use."""

    def __init__(
        self,
        model_name: str,
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
        temperature: float = 0.3,
        max_tokens: int = 1000,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self._model_name = model_name
        self._api_key = api_key
        self._api_base = api_base
        self._model_settings = ModelSettings(
            temperature=temperature, max_tokens=max_tokens
        )
        self._timeout_seconds = timeout_seconds
        self._model: Optional[OpenAIChatModel] = None
        self._agents: Dict[Tuple[Language, Language], Agent] = {}

    def _get_model(self) -> OpenAIChatModel:
        if self._model is None:
            logger.info(f"Initializing translation model {self._model_name}")
            provider = LiteLLMProvider(api_key=self._api_key, api_base=self._api_base)
            self._model = OpenAIChatModel(self._model_name, provider=provider)
        return self._model

    def _get_agent(self, source: Language, target: Language) -> Agent:
        key = (source, target)
        if key not in self._agents:
            self._agents[key] = Agent(
                self._get_model(),
                instructions=DefaultSystemPrompt.for_languages(
                    source.display_name, target.display_name
                ),
                model_settings=self._model_settings,
            )
        return self._agents[key]

    async def translate(self, text: str, source: Language, target: Language) -> str:
        """
        Translate text with a single model call.

        Raises:
            TranslationError: provider failure, timeout, or empty output.
        """
        try:
            agent = self._get_agent(source, target)
            result = await asyncio.wait_for(
                agent.run(text), timeout=self._timeout_seconds
            )
        except asyncio.TimeoutError as e:
            raise TranslationError(
                f"Translation timed out after {self._timeout_seconds}s"
            ) from e
        except Exception as e:
            raise TranslationError(f"{type(e).__name__}: {e}") from e

        translated = str(result.output or "").strip()
        if not translated:
            raise TranslationError("Translation returned empty result")
        return translated


def build_translator_from_env() -> LLMTranslator:
    settings = get_settings()
    logger.info(
        "Translator config: model=%s, api_key=%s, api_base=%s",
        settings.llm_model,
        "set" if settings.litellm_api_key else "not set",
        settings.litellm_api_base or "(default)",
    )
    if not settings.litellm_api_key:
        logger.warning(
            "LITELLM_API_KEY is not set; set it to a valid OpenAI or LiteLLM API key to avoid 401 errors."
        )
    return LLMTranslator(
        model_name=settings.llm_model,
        api_key=settings.litellm_api_key,
        api_base=settings.litellm_api_base,
        temperature=settings.translation_temperature,
        max_tokens=settings.translation_max_tokens,
        timeout_seconds=settings.translation_timeout_seconds,
    )
