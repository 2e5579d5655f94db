"""
Configuration Utility - Environment Variables Management

Centralized configuration loading from .env files using pydantic-settings.
Type-safe access to all environment variables with validation.

Usage:
    from utils.config import settings

    url = settings.STATUS_API_URL
    csv_path = settings.OUTPUT_CSV
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_VERSION = "0.1.0"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Status API Configuration
    STATUS_API_URL: str = Field(default="https://web.archive.org/save/status/system")
    API_TIMEOUT: float = Field(default=30, gt=0)
    HTTP_USER_AGENT: str = Field(default=f"spn2-status-probe/{APP_VERSION}")

    # File System Paths
    OUTPUT_CSV: str = Field(default="db.csv")
    BASE_LOG_DIR: str = Field(default="data/log")

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="text")

    # Application Metadata
    ENVIRONMENT: str = Field(default="production")
    APP_NAME: str = Field(default="spn2-status-probe")
    APP_VERSION: str = Field(default=APP_VERSION)

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Only 'text' and 'json' formatters exist."""
        v = v.lower().strip()
        if v not in ("text", "json"):
            raise ValueError("LOG_FORMAT must be 'text' or 'json'")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Singleton Settings instance
    """
    return Settings()


# Global settings instance
settings = get_settings()
