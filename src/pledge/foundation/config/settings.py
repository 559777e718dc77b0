"""Environment-based configuration using pydantic-settings.

Example:
    >>> from pledge.foundation.config import get_settings
    >>> get_settings().strict_settlement
    True

    # Or with environment variables:
    # PLEDGE_STRICT_SETTLEMENT=false
    # PLEDGE_OBSERVER_ERRORS=log
    # PLEDGE_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PLEDGE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class PledgeSettings(BaseSettings):
    """Root settings.

    Example environment variables:
        PLEDGE_STRICT_SETTLEMENT=false
        PLEDGE_OBSERVER_ERRORS=log
        PLEDGE_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="PLEDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    strict_settlement: bool = Field(
        default=True,
        description="Raise on a second unguarded settlement instead of ignoring it",
    )
    observer_errors: Literal["raise", "log"] = Field(
        default="raise",
        description="What to do when an observer callback raises during dispatch",
    )
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> PledgeSettings:
    """Get the global settings instance (cached)."""
    return PledgeSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
