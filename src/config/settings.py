"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # User storage
    users_db_path: str = "users.json"

    # Verification settings
    verification_ttl_seconds: int = 600  # Code validity window (10 minutes)
    product_name: str = "RateMyLandlord"  # Shown in verification emails

    # Mail transport
    mail_backend: Literal["smtp", "console"] = "smtp"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_username: str | None = None  # Mandatory for smtp backend
    smtp_password: str | None = None  # Mandatory for smtp backend
    smtp_from: str | None = None  # Defaults to smtp_username
    smtp_from_name: str | None = None
    smtp_timeout_seconds: float = 30.0

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
