"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Storage
    database_url: str = "sqlite+aiosqlite:///./shop.db"
    storage_backend: Literal["database", "memory"] = "database"
    seed_on_startup: bool = True

    # Admin authentication
    admin_auth_backend: Literal["secret", "account"] = "secret"
    admin_username: str = "admin"
    admin_password: str = "admin123"

    # Image uploads
    upload_dir: str = "uploads"
    upload_url_prefix: str = "/uploads"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
