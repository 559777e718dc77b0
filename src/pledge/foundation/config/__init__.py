"""Configuration management using pydantic-settings."""

from .settings import (
    LoggingSettings,
    PledgeSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "PledgeSettings",
    "clear_settings_cache",
    "get_settings",
]
