"""Configuration management for the ProHelper invitations client.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded once per
process and is immutable during runtime.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client configuration settings.

    Settings are loaded from environment variables (prefixed with
    ``PROHELPER_``) and .env files. All values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROHELPER_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    environment: Literal["development", "production", "testing"] = "development"

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Remote API Settings
    api_base_url: str = "https://api.prohelper.pro/api/v1/landing"
    request_timeout_seconds: float = 15.0

    # Credential Settings
    credential_file: Path = Field(
        default=Path("~/.prohelper/token"),
        description="File holding the cached bearer token",
    )

    # Invitation List Settings
    default_per_page: int = 15
    notification_per_page: int = 10

    # Notification Settings
    expiring_soon_days: int = 2
    badge_cap: int = 99

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be joined with a leading slash."""
        return v.rstrip("/")

    @field_validator("default_per_page", "notification_per_page", "badge_cap")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Page sizes and the badge cap must be positive."""
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("credential_file")
    @classmethod
    def expand_credential_file(cls, v: Path) -> Path:
        """Expand ``~`` in the credential file path."""
        return v.expanduser()

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached client settings instance.
    """
    return Settings()
