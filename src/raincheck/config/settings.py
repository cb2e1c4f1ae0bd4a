"""
Module: settings.py
Description: Library configuration using pydantic-settings.

Configures guaranteed delivery, store timeouts, the non-retryable status
code skip-list and connection details from environment variables
(prefixed RAINCHECK_) with validation and defaults. Supports .env files
for local development.
"""

from typing import Optional, Set

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SKIP_STATUS_CODES = frozenset({400, 401, 403, 404, 405})


class RainCheckSettings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RAINCHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    log_level: str = Field(default="INFO", description="Logging level")

    # Delivery settings
    guaranteed_delivery: bool = Field(
        default=True,
        description="Store a rain check when a send fails"
    )
    skip_status_codes: Set[int] = Field(
        default_factory=lambda: set(DEFAULT_SKIP_STATUS_CODES),
        description="Failure status codes that are never stored as rain checks"
    )

    # Store settings
    store_timeout_ms: Optional[int] = Field(
        default=None,
        ge=1,
        description="Deadline for each store operation in milliseconds (unset: no deadline)"
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL for the rain check store"
    )

    # Transport settings
    base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL requests are sent to"
    )
    request_timeout_seconds: float = Field(
        default=10,
        ge=1,
        le=300,
        description="HTTP timeout in seconds for each attempt"
    )

    @field_validator('skip_status_codes')
    @classmethod
    def validate_skip_status_codes(cls, v: Set[int]) -> Set[int]:
        """Validate every skip-listed code is an HTTP status code."""
        invalid = sorted(code for code in v if not 100 <= code <= 599)
        if invalid:
            raise ValueError(f"skip_status_codes contains invalid HTTP status codes: {invalid}")
        return v

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base URL is an HTTP/HTTPS URL."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError("base_url must be a valid HTTP/HTTPS URL")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()


# Global settings instance
settings = RainCheckSettings()
