"""Environment-based configuration using pydantic-settings.

Example:
    >>> from polltask.foundation.config import get_settings
    >>> get_settings().debug_assertions
    True

    # Or with environment variables:
    # POLLTASK_DEBUG_ASSERTIONS=false
    # POLLTASK_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="POLLTASK_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "text"] = "text"


class PolltaskSettings(BaseSettings):
    """Root settings for polltask.

    Example environment variables:
        POLLTASK_DEBUG_ASSERTIONS=false
        POLLTASK_LOG_LEVEL=DEBUG
        POLLTASK_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="POLLTASK_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug_assertions: bool = Field(
        default=True,
        description="Raise ProtocolViolation on poll-protocol misuse instead of only logging it",
    )
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> PolltaskSettings:
    """Get the global settings instance (cached)."""
    return PolltaskSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    The next get_settings() call reloads configuration from environment.
    """
    get_settings.cache_clear()
