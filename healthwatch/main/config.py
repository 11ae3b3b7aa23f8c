"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from healthwatch.shared import (
    DEFAULT_HISTORY_CAPACITY,
    DEFAULT_RETRIES,
    DEFAULT_RETRY_DELAY_MS,
    DEFAULT_TIMEOUT_MS,
    EnumEnvironment,
    EnumLogLevel,
)
from healthwatch.shared.env import load_secret_file_variables

load_secret_file_variables()


class APISettings(BaseSettings):
    """HTTP API configuration settings."""

    title: str = Field(default="Healthwatch", description="API title")
    description: str = Field(
        default="Health-check orchestration service for HTTP endpoints, "
        "databases and system resources",
        description="API description",
    )
    version: str = Field(default="1.0.0", description="API version")
    host: str = Field(default="0.0.0.0", description="Host to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="API_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )
    json_output: Optional[bool] = Field(
        default=None,
        description="Force JSON rendering (defaults to JSON in production only)",
        validation_alias=AliasChoices("LOG_JSON_OUTPUT", "LOG_JSON"),
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class EngineSettings(BaseSettings):
    """Health-check engine defaults."""

    default_timeout_ms: int = Field(
        default=DEFAULT_TIMEOUT_MS,
        gt=0,
        description="Attempt timeout used when a check sets none",
    )
    default_retries: int = Field(
        default=DEFAULT_RETRIES,
        ge=0,
        description="Retries used when a check sets none",
    )
    default_retry_delay_ms: int = Field(
        default=DEFAULT_RETRY_DELAY_MS,
        ge=0,
        description="Pause between two attempts",
    )
    history_capacity: int = Field(
        default=DEFAULT_HISTORY_CAPACITY,
        gt=0,
        description="Results kept per check",
    )
    bootstrap_file: Optional[str] = Field(
        default=None,
        description="JSON file holding a list of checks registered at startup",
    )

    model_config = SettingsConfigDict(
        env_prefix="ENGINE_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    api: APISettings = Field(default_factory=APISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Patched in tests to provide environment specific settings.
    """
    return AppSettings()
