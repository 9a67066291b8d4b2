"""Application configuration using Pydantic BaseSettings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.constants import DEFAULT_EDDIE_BASE_URL, EDDIE_API_TIMEOUT_SECONDS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Load .env first, then .env.local (for local/test overrides)
        # Later files override earlier ones, so .env.local takes precedence
        env_file=[".env", ".env.local"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Eddie Surf credentials
    eddie_api_key: str = Field(..., description="Eddie Surf API key from your dashboard")
    eddie_base_url: str = Field(
        default=DEFAULT_EDDIE_BASE_URL,
        description="The base URL for the Eddie Surf API",
    )
    eddie_api_timeout_seconds: float = Field(
        default=EDDIE_API_TIMEOUT_SECONDS,
        description="Local HTTP timeout for Eddie Surf API calls (seconds)",
    )

    # Per-item execution
    continue_on_fail: bool = Field(
        default=False,
        description="Record per-item errors and keep processing instead of aborting",
    )

    # Environment
    env: Literal["local", "railway", "prod"] = Field(
        default="local", description="Current environment"
    )
    log_level: str = Field(default="INFO", description="Python logging level")

    # Logfire Configuration
    logfire_token: str | None = Field(
        default=None, description="Pydantic Logfire token for observability"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
