"""
Domain Entities Package

This package contains the core domain entities and errors.
"""

from .errors import (
    CheckerError,
    CheckNotFoundError,
    DuplicateCheckError,
    HealthCheckError,
    UnsupportedCheckTypeError,
)
from .health import (
    CheckConfig,
    CheckMetrics,
    CheckOutcome,
    CheckType,
    DatabaseCheckConfig,
    DatabaseType,
    EvaluationResult,
    HealthStatus,
    HealthSummary,
    HttpCheckConfig,
    HttpMethod,
    SystemCheckConfig,
    SystemResource,
    SystemResourceCheck,
)

__all__ = [
    "CheckConfig",
    "CheckMetrics",
    "CheckOutcome",
    "CheckType",
    "DatabaseCheckConfig",
    "DatabaseType",
    "EvaluationResult",
    "HealthStatus",
    "HealthSummary",
    "HttpCheckConfig",
    "HttpMethod",
    "SystemCheckConfig",
    "SystemResource",
    "SystemResourceCheck",
    "HealthCheckError",
    "CheckNotFoundError",
    "DuplicateCheckError",
    "UnsupportedCheckTypeError",
    "CheckerError",
]
