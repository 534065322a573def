"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Campus backend
    api_base_url: str = "http://localhost:3001/api"
    api_timeout_seconds: float = 10.0  # Per-request timeout

    # Resend cooldown
    resend_cooldown_seconds: int = Field(default=300, ge=0)  # Mirrors the server's resend window
    tick_interval_seconds: float = Field(default=1.0, gt=0)  # Countdown cadence

    # Session hosting
    session_idle_timeout_seconds: float = Field(default=1800.0, gt=0)  # Abandoned screen cutoff


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
