"""
Client settings - pydantic-settings configuration.

This module defines client configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API endpoint
    api_url: str = "https://a.wunderlist.com/api/v1"

    # Credentials, sent by the auth session on every request
    client_id: str | None = None
    access_token: str | None = None

    # HTTP settings
    http_timeout_seconds: float = Field(default=20.0, gt=0)  # Per-request timeout
    request_id_header: str = "X-Request-ID"  # Header carrying the correlation id

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
