"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces configuration
values from various sources (environment, files, programmatic) into the correct
types with proper defaults.
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.mnotify.com/api/"


class MNotifySettings(BaseSettings):
    """Pydantic settings schema for the mNotify client.

    Handles validation, type coercion, and defaults for all configuration
    fields. It integrates with environment variables using the MNOTIFY_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="MNOTIFY_",
        env_file=None,  # Only used when explicitly requested
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown env vars for forward compatibility
    )

    api_key: str | None = Field(
        default=None,
        description="mNotify API key",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="API root URL; path prefixes such as /api are preserved",
        min_length=1,
    )

    timeout: int = Field(
        default=10_000,
        description="Per-attempt request timeout in milliseconds",
        gt=0,
    )

    max_retries: int = Field(
        default=3,
        description="How many times a rate-limited (429) request is retried",
        ge=0,
    )

    @field_validator("base_url")
    @classmethod
    def check_base_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid base_url: {v!r}. Must start with http:// or https://")
        return v

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary suitable for SourceMap annotation."""
        return {
            "api_key": self.api_key,
            "base_url": self.base_url,
            "timeout": self.timeout,
            "max_retries": self.max_retries,
        }
