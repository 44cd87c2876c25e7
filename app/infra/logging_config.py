"""Logging configuration."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from app.config import get_settings

ROOT_LOGGER_NAME = "app"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that log every HTTP round trip at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "telegram", "openai")


class LoggingConfig:
    """Configure application logging once per process."""

    _configured = False

    def __init__(self, log_level: Optional[str] = None) -> None:
        level_name = (log_level or get_settings().log_level).upper()
        self.level = getattr(logging, level_name, logging.INFO)
        if not LoggingConfig._configured:
            self._configure()
            LoggingConfig._configured = True
        else:
            logging.getLogger(ROOT_LOGGER_NAME).setLevel(self.level)

    def _configure(self) -> None:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

        app_logger = logging.getLogger(ROOT_LOGGER_NAME)
        app_logger.setLevel(self.level)
        app_logger.addHandler(handler)

        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

        app_logger.info(
            "Logging configured with level: %s", logging.getLevelName(self.level)
        )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the application namespace."""
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
