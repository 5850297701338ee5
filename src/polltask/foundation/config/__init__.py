"""Configuration management using pydantic-settings."""

from .settings import (
    LoggingSettings,
    PolltaskSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "PolltaskSettings",
    "clear_settings_cache",
    "get_settings",
]
