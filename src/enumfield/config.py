"""Library-wide configuration loaded from environment / .env file."""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ENUMFIELD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Logging ──────────────────────────────────────────
    log_level: LogLevel = LogLevel.INFO

    # ── Validation ───────────────────────────────────────
    invalid_message: str = Field(
        default="is not valid",
        description="Error message used by inclusion constraints without an explicit message",
    )

    # ── Generated methods ────────────────────────────────
    predicate_prefix: str = Field(
        default="is_",
        description="Prefix of the per-value predicate methods (is_new, is_completed, ...)",
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the cached singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()  # type: ignore[call-arg]
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the environment is re-read on next access."""
    global _settings
    _settings = None
