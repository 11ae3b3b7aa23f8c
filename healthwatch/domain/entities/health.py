"""
Health domain entities.

This module defines the check configurations, evaluation results and
aggregated views that flow through the health-check engine.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Pattern, Set, Union


class HealthStatus(str, Enum):
    """Outcome of a single evaluation or of an aggregated view."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"

    @property
    def is_success(self) -> bool:
        """Healthy and degraded evaluations both count as successful."""
        return self in (HealthStatus.HEALTHY, HealthStatus.DEGRADED)


class CheckType(str, Enum):
    """Category of a check; selects the checker that evaluates it."""

    HTTP = "http"
    DATABASE = "database"
    SYSTEM = "system"
    CUSTOM = "custom"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    HEAD = "HEAD"


class DatabaseType(str, Enum):
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    MONGODB = "mongodb"
    REDIS = "redis"
    RABBITMQ = "rabbitmq"


class SystemResource(str, Enum):
    MEMORY = "memory"
    CPU = "cpu"
    DISK = "disk"


@dataclass(kw_only=True)
class CheckConfig:
    """Configuration shared by every check.

    ``interval`` and ``timeout`` are expressed in milliseconds. An interval
    of 0 keeps the check out of the scheduler (manual execution only).
    A ``timeout`` or ``retries`` left as None falls back to the engine
    defaults at execution time.
    """

    id: str
    name: str
    type: CheckType = CheckType.CUSTOM
    enabled: bool = True
    interval: int = 0
    timeout: Optional[int] = None
    retries: Optional[int] = None
    tags: Set[str] = field(default_factory=set)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_schedulable(self) -> bool:
        return self.enabled and self.interval > 0


@dataclass(kw_only=True)
class HttpCheckConfig(CheckConfig):
    """Network endpoint check."""

    type: CheckType = field(default=CheckType.HTTP, init=False)
    url: str
    method: HttpMethod = HttpMethod.GET
    headers: Dict[str, str] = field(default_factory=dict)
    expected_status_codes: List[int] = field(default_factory=lambda: [200])
    expected_body: Optional[Union[str, Pattern[str]]] = None
    follow_redirects: bool = True

    def body_matches(self, body: str) -> bool:
        if self.expected_body is None:
            return True
        if isinstance(self.expected_body, re.Pattern):
            return self.expected_body.search(body) is not None
        return self.expected_body in body


@dataclass(kw_only=True)
class DatabaseCheckConfig(CheckConfig):
    """Data-store connection check."""

    type: CheckType = field(default=CheckType.DATABASE, init=False)
    connection_string: str
    database_type: DatabaseType
    query: Optional[str] = None
    expected_result: Optional[Any] = None


@dataclass(slots=True)
class SystemResourceCheck:
    """One resource probe inside a system check.

    ``threshold`` is a usage percentage. ``path`` only applies to disk
    probes and defaults to the current working directory.
    """

    type: SystemResource
    threshold: float
    path: Optional[str] = None


@dataclass(kw_only=True)
class SystemCheckConfig(CheckConfig):
    """Local resource check composed of ordered resource probes."""

    type: CheckType = field(default=CheckType.SYSTEM, init=False)
    checks: List[SystemResourceCheck] = field(default_factory=list)


@dataclass(slots=True)
class CheckOutcome:
    """What a checker reports for one successful attempt."""

    status: HealthStatus
    message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Canonical record of one execution, retries included."""

    id: str
    name: str
    type: CheckType
    status: HealthStatus
    timestamp: datetime
    duration: float
    message: Optional[str] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    retry_count: int = 0


@dataclass(slots=True)
class CheckMetrics:
    """Running statistics for one check."""

    total_executions: int = 0
    successful_executions: int = 0
    failed_executions: int = 0
    average_response_time: float = 0.0
    last_execution_time: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    uptime: float = 100.0


@dataclass(slots=True)
class HealthSummary:
    """Aggregated health over one execution batch."""

    status: HealthStatus
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    total_checks: int = 0
    healthy_checks: int = 0
    unhealthy_checks: int = 0
    degraded_checks: int = 0
    unknown_checks: int = 0
    checks: List[EvaluationResult] = field(default_factory=list)
