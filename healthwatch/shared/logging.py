"""
Logging Configuration - Shared Layer

Routes structlog events and stdlib records through a single set of
handlers so that checker libraries (httpx, pika, asyncpg, ...) and the
engine itself share one output format.
"""

import logging
import os
import sys
from typing import Any, Dict, List, Optional

import structlog
from structlog.types import Processor

from healthwatch.shared.consts import SERVICE_NAME, EnumEnvironment

# Client libraries that log every request or frame at INFO/DEBUG.
NOISY_LOGGERS = ("httpx", "httpcore", "pika", "asyncio", "pymongo")


def _get_log_config_from_env() -> Dict[str, Optional[str]]:
    """Read the bootstrap configuration used before settings are loaded."""
    return {
        "level": os.environ.get("LOG_LEVEL", "INFO"),
        "file_path": os.environ.get("LOG_FILE_PATH"),
        "json": os.environ.get("LOG_JSON"),
    }


def _shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _build_handlers(file_path: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if file_path:
        handlers.append(logging.FileHandler(file_path))
    return handlers


def _use_json(environment: str, json_output: Optional[bool]) -> bool:
    if json_output is not None:
        return json_output
    return environment.lower() == EnumEnvironment.PRODUCTION.value


def configure_logging(
    level: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = "development",
    json_output: Optional[bool] = None,
) -> None:
    """
    Configure structlog and the standard logging root logger.

    Can be called more than once: each call replaces the root handlers.

    Args:
        level: Log level name, falls back to ``LOG_LEVEL``.
        file_path: Optional log file, falls back to ``LOG_FILE_PATH``.
        environment: Application environment; production renders JSON.
        json_output: Force JSON (True) or console (False) rendering.
    """
    env_config = _get_log_config_from_env()

    log_level = (level or env_config["level"] or "INFO").upper()
    log_file = file_path or env_config["file_path"]
    if json_output is None and env_config["json"]:
        json_output = env_config["json"].lower() in ("1", "true", "yes")

    numeric_level = getattr(logging, log_level, logging.INFO)

    renderer: Processor
    if _use_json(environment, json_output):
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=_shared_processors(),
    )

    handlers = _build_handlers(log_file)
    for handler in handlers:
        handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    quiet_level = max(numeric_level, logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(service=SERVICE_NAME)

    get_logger(__name__).info(
        "logging.configured", level=log_level, file_path=log_file
    )


def update_logging_from_settings(settings: Any) -> None:
    """
    Reconfigure logging from the loaded application settings.

    Args:
        settings: ``AppSettings`` instance (``settings.logging`` and
            ``settings.environment`` are read).
    """
    log_level = getattr(settings.logging.level, "value", settings.logging.level)
    environment = getattr(settings.environment, "value", settings.environment)

    configure_logging(
        level=log_level,
        file_path=settings.logging.file_path,
        environment=environment,
        json_output=settings.logging.json_output,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the project."""
    return structlog.get_logger(name)
