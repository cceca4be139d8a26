"""Centralised configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
Tests construct ``Settings(_env_file=None, ...)`` directly for isolation.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clozemark.markup.marker_constants import (
    DEFAULT_ANCHOR_TAG,
    DEFAULT_ID_PREFIX,
    DEFAULT_MAX_HIGHLIGHT_LENGTH,
    HIGHLIGHT_DELIMITER,
)

logger = logging.getLogger(__name__)

# src/clozemark/config.py  ->  parent x3  ->  project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

_TAG_NAME = re.compile(r"^[a-z][a-z0-9]*$")
# Single underscores only, so an anchor id can never contain a blank marker
_ID_PREFIX = re.compile(r"^[A-Za-z][A-Za-z0-9-]*(?:_[A-Za-z0-9-]+)*$")


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class ClozeConfig(BaseModel):
    """Markup scanning and anchor output."""

    max_highlight_length: int = Field(
        default=DEFAULT_MAX_HIGHLIGHT_LENGTH, ge=1, le=200
    )
    anchor_tag: str = DEFAULT_ANCHOR_TAG
    id_prefix: str = DEFAULT_ID_PREFIX
    warn_on_unlinked_blanks: bool = True

    @field_validator("anchor_tag")
    @classmethod
    def _valid_tag(cls, value: str) -> str:
        value = value.strip().lower()
        if not _TAG_NAME.match(value):
            msg = f"CLOZE__ANCHOR_TAG must be a plain HTML tag name, got {value!r}"
            raise ValueError(msg)
        return value

    @field_validator("id_prefix")
    @classmethod
    def _valid_prefix(cls, value: str) -> str:
        if not _ID_PREFIX.match(value) or HIGHLIGHT_DELIMITER in value:
            msg = (
                "CLOZE__ID_PREFIX must start with a letter and contain only "
                f"letters, digits, '-' and single '_', got {value!r}"
            )
            raise ValueError(msg)
        return value


class AppConfig(BaseModel):
    """Runtime configuration for the command-line tools."""

    log_dir: Path = Path("logs")
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in logging.getLevelNamesMapping():
            msg = f"APP__LOG_LEVEL must be a logging level name, got {value!r}"
            raise ValueError(msg)
        return value


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Settings with automatic .env loading and type validation.

    Environment variables use double-underscore delimiter for nesting:
    ``CLOZE__MAX_HIGHLIGHT_LENGTH``, ``CLOZE__ID_PREFIX``, ``APP__LOG_DIR``, etc.
    """

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    cloze: ClozeConfig = ClozeConfig()
    app: AppConfig = AppConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()

    env_file = settings.model_config.get("env_file")
    if env_file is not None and Path(str(env_file)).is_file():
        logger.info("Settings loaded .env from: %s", env_file)
    else:
        logger.debug("Settings: no .env file found, using env vars and defaults")

    return settings
