from pathlib import Path

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, model_validator
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.schemas.relay import Language

# Project root (parent of app/) - used so .env is found regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Explicitly load .env into os.environ so it works in tests and subprocesses
load_dotenv(_PROJECT_ROOT / ".env")


class Settings(BaseSettings):
    app_name: str = "relay-inbox-api"
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENV", "ENVIRONMENT"),
    )
    log_level: str = Field(default="INFO", json_schema_extra={"env": "LOG_LEVEL"})
    port: int = Field(default=8000, json_schema_extra={"env": "PORT"})

    # Telegram
    telegram_enabled: bool = Field(
        default=False, json_schema_extra={"env": "TELEGRAM_ENABLED"}
    )
    telegram_bot_token: Optional[str] = Field(
        default=None, json_schema_extra={"env": "TELEGRAM_BOT_TOKEN"}
    )
    telegram_webhook_secret: Optional[str] = Field(
        default=None, json_schema_extra={"env": "TELEGRAM_WEBHOOK_SECRET"}
    )
    delivery_timeout_seconds: float = Field(
        default=15.0, gt=0, json_schema_extra={"env": "DELIVERY_TIMEOUT_SECONDS"}
    )

    # LLM / LiteLLM
    llm_model: str = Field(
        default="gpt-4o-mini", json_schema_extra={"env": "LLM_MODEL"}
    )
    litellm_api_key: Optional[str] = Field(
        default=None, json_schema_extra={"env": "LITELLM_API_KEY"}
    )
    litellm_api_base: Optional[str] = Field(
        default=None, json_schema_extra={"env": "LITELLM_API_BASE"}
    )
    translation_temperature: float = Field(
        default=0.3, ge=0, le=2, json_schema_extra={"env": "TRANSLATION_TEMPERATURE"}
    )
    translation_max_tokens: int = Field(
        default=1000, gt=0, json_schema_extra={"env": "TRANSLATION_MAX_TOKENS"}
    )
    translation_timeout_seconds: float = Field(
        default=30.0, gt=0, json_schema_extra={"env": "TRANSLATION_TIMEOUT_SECONDS"}
    )

    # Relay languages: chat users write in source, the operator reads in target
    source_language: Language = Field(
        default=Language.KO, json_schema_extra={"env": "SOURCE_LANGUAGE"}
    )
    target_language: Language = Field(
        default=Language.EN, json_schema_extra={"env": "TARGET_LANGUAGE"}
    )

    @model_validator(mode="after")
    def check_languages_differ(self) -> "Settings":
        """Source and target must form a two-language pair."""
        if self.source_language == self.target_language:
            raise ValueError("SOURCE_LANGUAGE and TARGET_LANGUAGE must differ")
        return self

    @property
    def is_production(self) -> bool:
        """Check if the current environment is production."""
        return self.environment.lower() == "production"

    @property
    def is_test(self) -> bool:
        """Check if the current environment is test."""
        return self.environment.lower() == "test"

    @property
    def telegram_configured(self) -> bool:
        return bool(self.telegram_enabled and self.telegram_bot_token)

    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings with required environment variables."""
    return Settings()
