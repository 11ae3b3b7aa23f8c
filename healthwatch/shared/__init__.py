"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides the constants, enums and logging helpers used by
every layer of the health-check service. It must not depend on
Infrastructure or Frameworks beyond structlog.
"""

from .consts import (
    DEFAULT_HISTORY_CAPACITY,
    DEFAULT_RETRIES,
    DEFAULT_RETRY_DELAY_MS,
    DEFAULT_TIMEOUT_MS,
    SERVICE_NAME,
    EnumEnvironment,
    EnumLogLevel,
)
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "DEFAULT_HISTORY_CAPACITY",
    "DEFAULT_RETRIES",
    "DEFAULT_RETRY_DELAY_MS",
    "DEFAULT_TIMEOUT_MS",
    "SERVICE_NAME",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
