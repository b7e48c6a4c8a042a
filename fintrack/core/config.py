from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    This uses pydantic-settings so that we get type validation and defaults.
    Settings are loaded from environment variables with optional .env file override.
    """

    # App basics
    ENV: Literal["development", "staging", "production"] = "development"
    """Environment mode: affects logging and destructive db commands."""

    DEBUG: bool = True
    """Enable debug mode: verbose logging and development features."""

    APP_NAME: str = "Smart Finance Tracker"
    """Service name shown in startup logs and the OpenAPI title."""

    # DB
    DATABASE_URL: Optional[str] = None
    """Database connection URL. If None, uses SQLite for development."""

    # SMS parsing
    SMS_MAX_MESSAGE_LENGTH: int = 2000
    """Longest message body the extractor will scan. Longer input yields no record."""

    SMS_LOG_MESSAGE_BODIES: bool = False
    """Include raw message bodies in debug logs. Bodies may carry account data."""

    # Model config
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance to avoid re-parsing .env repeatedly."""
    return Settings()
