"""Configuration management for record-serializer.

All configuration values can be overridden via environment variables or .env file.

Environment Variables:
    RECORDSERIALIZER_MAX_DEPTH: Maximum relation nesting followed during
                                normalization and reconstruction (default: 64)
    RECORDSERIALIZER_DATETIME_FORMAT: strftime pattern used when normalizing
                                      dates (default: unset, ISO-8601)
    RECORDSERIALIZER_LOG_LEVEL: Logging level (default: INFO)
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Serializer settings.

    Defaults are safe for most object graphs; raise ``max_depth`` only for
    deliberately deep relation chains.
    """

    model_config = SettingsConfigDict(
        env_prefix="RECORDSERIALIZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Recursion guard
    max_depth: int = 64

    # Date handling
    datetime_format: Optional[str] = None

    # Logging configuration
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured log level to the package logger."""
    settings = settings or get_settings()
    logging.getLogger("recordserializer").setLevel(settings.log_level.upper())
