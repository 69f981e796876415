"""Configuration loading for the buildhooks relay.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
- Decide between real and log-only build triggering
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VERSION = "1.0.0"


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Environment
    env_mode: Literal["development", "production"] = Field(
        default="development",
        description="Server environment mode; builds are only logged in development",
    )

    # Build trigger configuration
    send_request_to_url: str | None = Field(
        default=None,
        description="Override build trigger URL; when set, every build request is sent here",
    )
    bitrise_api_root_url: str = Field(
        default="https://app.bitrise.io",
        description="Root URL used to derive per-app build trigger endpoints",
    )
    trigger_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for each build trigger request in seconds",
    )

    # Webhook server configuration
    webhook_host: str = Field(
        default="0.0.0.0",
        description="Host to listen on for webhook server",
    )
    webhook_port: int = Field(
        default=4000,
        description="Port to listen on for webhook server",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("send_request_to_url")
    @classmethod
    def validate_send_request_to_url(cls, v: str | None) -> str | None:
        """Treat an empty override as unset and require an http(s) URL otherwise."""
        if v is None or not v.strip():
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError("send_request_to_url must be an http(s) URL")
        return v

    @field_validator("trigger_timeout_seconds")
    @classmethod
    def validate_trigger_timeout(cls, v: float) -> float:
        """Ensure trigger timeout is positive."""
        if v <= 0:
            raise ValueError("trigger_timeout_seconds must be positive")
        return v

    @field_validator("webhook_port")
    @classmethod
    def validate_webhook_port(cls, v: int) -> int:
        """Ensure webhook port is in valid range."""
        if v <= 0 or v > 65535:
            raise ValueError("webhook_port must be between 1 and 65535")
        return v

    @property
    def only_log_triggers(self) -> bool:
        """Whether build triggers are logged instead of sent.

        Triggers are sent for real when an override URL is configured
        or the server runs in production mode.
        """
        return not (self.send_request_to_url is not None or self.env_mode == "production")


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "VERSION", "load_settings"]
