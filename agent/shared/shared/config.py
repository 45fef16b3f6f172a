"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # NetCores API
    netcores_api_url: str = "https://netcores.fi.uba.ar"
    # Per-request timeout in seconds
    netcores_timeout: float = Field(default=30.0, gt=0)
    # Total tries per request, including the first one
    netcores_retry_attempts: int = Field(default=3, ge=1)
    # Base backoff delay; doubles after each failed attempt
    netcores_retry_delay_ms: int = Field(default=1000, ge=0)

    # Module service
    service_auth_token: str = ""
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
