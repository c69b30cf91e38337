"""Application configuration loaded via Pydantic settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    CONTOUR_LOG_LEVEL: str = Field(default="info")
    CONTOUR_LOG_DIR: Path | None = Field(default=None)
    CONTOUR_LOG_SCHEMA_VERSION: str = Field(default="1.0.0")
    CONTOUR_DATA_DIR: Path = Field(default=Path("./data"))
    CONTOUR_KV_FILENAME: str = Field(default="contour_kv.json")

    # Remote resolution cache
    CACHE_ENABLED: bool = Field(default=True)
    CACHE_MAX_ENTRIES: int = Field(default=50)
    CACHE_DICTIONARY_TTL_SECONDS: int = Field(default=7 * 24 * 60 * 60)
    CACHE_TRANSLATION_TTL_SECONDS: int = Field(default=24 * 60 * 60)
    CACHE_CURRENCY_TTL_SECONDS: int = Field(default=60 * 60)

    # Providers
    EXCHANGE_RATE_API_URL: str = Field(default="https://api.exchangerate-api.com/v4/latest")
    TRANSLATION_API_URL: str = Field(default="https://api.mymemory.translated.net/get")
    DICTIONARY_API_URL: str = Field(default="https://api.dictionaryapi.dev/api/v2/entries/en")
    HTTP_TIMEOUT_SECONDS: float = Field(default=10.0)

    NOTIFICATIONS_ENABLED: bool = Field(default=True)
    MAX_RECENT_COMMANDS: int = Field(default=5)


settings = Settings()
config = settings  # Alias for callers that prefer the shorter name


__all__ = ["Settings", "settings", "config"]
