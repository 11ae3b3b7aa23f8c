"""Structured log events emitted after check executions."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import structlog

from healthwatch.domain.entities.health import (
    EvaluationResult,
    HealthStatus,
    HealthSummary,
)

_WARN_STATUSES = (HealthStatus.UNHEALTHY, HealthStatus.UNKNOWN)


def _level_for(status: HealthStatus) -> int:
    return logging.WARNING if status in _WARN_STATUSES else logging.INFO


class StructlogHealthEventSink:
    """Publish execution outcomes as structlog events.

    Healthy and degraded outcomes are logged at info level, unhealthy and
    unknown ones at warning level.
    """

    def __init__(self, logger: Optional[Any] = None) -> None:
        self._logger = logger or structlog.get_logger("healthwatch.events")

    def result_recorded(self, result: EvaluationResult) -> None:
        fields: Dict[str, Any] = {
            "check_id": result.id,
            "check_name": result.name,
            "check_type": result.type.value,
            "status": result.status.value,
            "duration": result.duration,
            "retry_count": result.retry_count,
            "timestamp": result.timestamp.isoformat(),
        }
        if result.error:
            fields["error"] = result.error
        if result.message:
            fields["detail"] = result.message

        self._logger.log(_level_for(result.status), "health.check.executed", **fields)

    def summary_generated(self, summary: HealthSummary) -> None:
        self._logger.log(
            _level_for(summary.status),
            "health.summary",
            overall_status=summary.status.value,
            total_checks=summary.total_checks,
            healthy_checks=summary.healthy_checks,
            unhealthy_checks=summary.unhealthy_checks,
            degraded_checks=summary.degraded_checks,
            unknown_checks=summary.unknown_checks,
            timestamp=summary.timestamp.isoformat(),
        )
