"""Running per-check statistics derived from evaluation results."""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import Dict, Optional

from healthwatch.domain.entities.health import CheckMetrics, EvaluationResult


class MetricsAggregator:
    """Maintain execution counters, mean duration and uptime per check.

    Every update is one read-modify-write under the aggregator lock, and
    readers get copies so they never observe a half-applied update.
    """

    def __init__(self) -> None:
        self._metrics: Dict[str, CheckMetrics] = {}
        self._lock = threading.Lock()

    def initialize(self, check_id: str) -> None:
        with self._lock:
            self._metrics[check_id] = CheckMetrics()

    def record(self, check_id: str, result: EvaluationResult) -> None:
        with self._lock:
            metrics = self._metrics.get(check_id)
            if metrics is None:
                return

            metrics.total_executions += 1
            metrics.last_execution_time = result.timestamp
            if result.status.is_success:
                metrics.successful_executions += 1
            else:
                metrics.failed_executions += 1

            total = metrics.total_executions
            average = (
                metrics.average_response_time * (total - 1) + result.duration
            ) / total
            metrics.average_response_time = round(average, 2)
            metrics.uptime = round(metrics.successful_executions / total * 100, 2)

    def get(self, check_id: str) -> Optional[CheckMetrics]:
        with self._lock:
            metrics = self._metrics.get(check_id)
            return replace(metrics) if metrics is not None else None

    def all(self) -> Dict[str, CheckMetrics]:
        with self._lock:
            return {key: replace(value) for key, value in self._metrics.items()}

    def drop(self, check_id: str) -> None:
        with self._lock:
            self._metrics.pop(check_id, None)
