"""
Configuration Management

Uses Pydantic Settings for type-safe environment variable handling.
"""

import os
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HEALTHCHECK_ROOT = "/healthcheck"


class Settings(BaseSettings):
    """Healthcheck endpoint settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env" if os.path.exists(".env") else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Endpoint
    healthcheck_root: str = DEFAULT_HEALTHCHECK_ROOT

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Server main switch
    server_enabled_message: str | None = "Server enabled"
    server_disabled_message: str | None = "Server disabled"

    @field_validator("healthcheck_root")
    @classmethod
    def validate_healthcheck_root(cls, v: str) -> str:
        """Ensure the endpoint path is absolute."""
        if not v.startswith("/"):
            raise ValueError("healthcheck_root must start with '/'")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"log_level must be a standard level name, got {v!r}")
        return level


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
