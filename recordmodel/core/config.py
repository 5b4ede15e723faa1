"""Core configuration module."""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMATS = ("json", "console")


class Settings(BaseSettings):
    """Record model settings."""

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = os.getenv("ENVIRONMENT", "development")

    # Database
    database_url: str = "sqlite:///./recordmodel.db"
    sql_echo: bool = False

    # Persistence behaviour
    commit_on_flush: bool = True
    recent_limit: int = 20

    # Logging
    log_level: str = "INFO"
    log_format: str | None = None  # "json", "console", or None (auto-detect based on environment)

    @field_validator("recent_limit")
    @classmethod
    def require_positive_recent_limit(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("RECENT_LIMIT must be a positive integer")
        return value

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, value):
        """Accept mixed case; treat empty strings as auto-detect."""
        if value is None or value == "":
            return None
        value = str(value).lower()
        if value not in LOG_FORMATS:
            raise ValueError(f"Invalid LOG_FORMAT '{value}': expected one of {', '.join(LOG_FORMATS)}")
        return value

    @field_validator("database_url")
    @classmethod
    def guard_sqlite_in_production(cls, value: str) -> str:
        """Production deployments must point at a real database server."""
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env == "production" and value.startswith("sqlite"):
            raise ValueError("database_url must be provided via environment for production")
        return value


settings = Settings()
