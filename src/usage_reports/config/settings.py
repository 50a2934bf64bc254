"""SDK-wide settings and configuration management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SDK settings loaded from environment variables.

    Per-service values (URL, credentials, retry switches) come from the
    external service properties instead, see
    :func:`usage_reports.config.read_service_properties`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # IAM Configuration
    iam_url: str = Field(
        default="https://iam.cloud.ibm.com",
        description="IAM token service base URL",
    )
    iam_token_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for IAM token requests",
    )

    # HTTP Configuration
    request_timeout_seconds: float = Field(
        default=60.0,
        description="Timeout for API requests",
    )
    max_retries: int = Field(
        default=4,
        description="Default maximum retries when retries are enabled",
    )
    retry_interval_seconds: float = Field(
        default=30.0,
        description="Default upper bound for the wait between retries",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached SDK settings."""
    return Settings()
