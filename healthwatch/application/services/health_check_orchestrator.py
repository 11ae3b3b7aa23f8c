"""
Health Check Orchestrator - Application Layer

Facade over the check registry, scheduler, execution controller, result
store and metrics aggregator. It is the only entry point the outer layers
use to drive the engine.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from healthwatch.application.models import ExecutionOptions
from healthwatch.application.services.check_scheduler import CheckScheduler
from healthwatch.application.services.execution_controller import (
    ExecutionController,
)
from healthwatch.application.services.metrics_aggregator import MetricsAggregator
from healthwatch.application.services.result_store import ResultStore
from healthwatch.domain.entities.errors import (
    CheckNotFoundError,
    DuplicateCheckError,
    UnsupportedCheckTypeError,
)
from healthwatch.domain.entities.health import (
    CheckConfig,
    CheckMetrics,
    CheckType,
    EvaluationResult,
    HealthStatus,
    HealthSummary,
)
from healthwatch.domain.ports.health_check import IChecker, IHealthEventSink
from healthwatch.domain.services.status_rules import aggregate_status
from healthwatch.shared import get_logger

logger = get_logger(__name__)


class HealthCheckOrchestrator:
    """Register, schedule, execute and report on health checks."""

    def __init__(
        self,
        checkers: Optional[Mapping[CheckType, IChecker]] = None,
        *,
        execution_controller: Optional[ExecutionController] = None,
        result_store: Optional[ResultStore] = None,
        metrics: Optional[MetricsAggregator] = None,
        event_sink: Optional[IHealthEventSink] = None,
    ) -> None:
        self._registry: Dict[str, CheckConfig] = {}
        self._checkers: Dict[CheckType, IChecker] = dict(checkers or {})
        self._controller = execution_controller or ExecutionController()
        self._results = result_store or ResultStore()
        self._metrics = metrics or MetricsAggregator()
        self._event_sink = event_sink
        self._scheduler = CheckScheduler(self._run_scheduled)

    @property
    def scheduler(self) -> CheckScheduler:
        return self._scheduler

    def register_checker(self, check_type: CheckType, checker: IChecker) -> None:
        """Serve ``check_type`` with ``checker``, replacing any previous one."""
        self._checkers[check_type] = checker

    # Registry -----------------------------------------------------------

    def has_check(self, check_id: str) -> bool:
        return check_id in self._registry

    def register(self, config: CheckConfig) -> None:
        """Add a check and start its timer when it is enabled with an interval.

        Raises:
            DuplicateCheckError: If a check with the same id exists.
        """
        if config.id in self._registry:
            raise DuplicateCheckError(config.id)

        if config.is_schedulable:
            self._scheduler.start(config.id, config.interval)

        self._registry[config.id] = config
        self._metrics.initialize(config.id)

        logger.info(
            "orchestrator.check.registered",
            check_id=config.id,
            check_type=config.type.value,
            scheduled=config.is_schedulable,
        )

    def unregister(self, check_id: str) -> None:
        """Remove a check together with its timer, history and metrics.

        Raises:
            CheckNotFoundError: If the id is not registered.
        """
        if check_id not in self._registry:
            raise CheckNotFoundError(check_id)

        self._scheduler.cancel(check_id)
        del self._registry[check_id]
        self._results.drop(check_id)
        self._metrics.drop(check_id)
        logger.info("orchestrator.check.unregistered", check_id=check_id)

    def toggle(self, check_id: str, enabled: bool) -> CheckConfig:
        """Enable or disable a check, starting or cancelling its timer.

        Raises:
            CheckNotFoundError: If the id is not registered.
        """
        config = self._get_config(check_id)
        config.enabled = enabled

        if config.is_schedulable:
            self._scheduler.start(check_id, config.interval)
        else:
            self._scheduler.cancel(check_id)

        logger.info("orchestrator.check.toggled", check_id=check_id, enabled=enabled)
        return config

    def list_configs(self) -> List[CheckConfig]:
        return list(self._registry.values())

    def get_config(self, check_id: str) -> CheckConfig:
        return self._get_config(check_id)

    # Execution ----------------------------------------------------------

    async def execute_one(
        self,
        check_id: str,
        options: Optional[ExecutionOptions] = None,
    ) -> EvaluationResult:
        """Evaluate one check now and record the result.

        Raises:
            CheckNotFoundError: If the id is not registered.
            UnsupportedCheckTypeError: If no checker serves the check type.
        """
        config = self._get_config(check_id)
        checker = self._checkers.get(config.type)
        if checker is None:
            raise UnsupportedCheckTypeError(
                f"No checker available for type '{config.type.value}'",
                details={"check_id": check_id},
            )

        result = await self._controller.execute(config, checker, options)

        # The check may have been unregistered while it was running.
        if self.has_check(check_id):
            self._results.record(check_id, result)
            self._metrics.record(check_id, result)

        if self._event_sink is not None:
            self._event_sink.result_recorded(result)
        return result

    async def execute_all(self) -> HealthSummary:
        """Evaluate every enabled check concurrently and aggregate the batch."""
        enabled = [config for config in self._registry.values() if config.enabled]

        outcomes = await asyncio.gather(
            *(self.execute_one(config.id) for config in enabled),
            return_exceptions=True,
        )

        results: List[EvaluationResult] = []
        for config, outcome in zip(enabled, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning(
                    "orchestrator.check.execution_failed",
                    check_id=config.id,
                    error=str(outcome),
                )
                results.append(_failed_result(config, outcome))
            else:
                results.append(outcome)

        summary = _summarize(results)
        if self._event_sink is not None:
            self._event_sink.summary_generated(summary)
        return summary

    async def _run_scheduled(self, check_id: str) -> None:
        await self.execute_one(check_id)

    # Queries ------------------------------------------------------------

    def status_of(self, check_id: str) -> Optional[EvaluationResult]:
        """Most recent stored result, without re-executing the check."""
        return self._results.latest(check_id)

    def history_of(self, check_id: str) -> List[EvaluationResult]:
        return self._results.history(check_id)

    def metrics_of(
        self, check_id: Optional[str] = None
    ) -> CheckMetrics | Dict[str, CheckMetrics]:
        """Metrics for one check, or for every check when no id is given.

        Raises:
            CheckNotFoundError: If ``check_id`` has no metrics.
        """
        if check_id is None:
            return self._metrics.all()

        metrics = self._metrics.get(check_id)
        if metrics is None:
            raise CheckNotFoundError(check_id)
        return metrics

    def shutdown(self) -> None:
        """Cancel every active timer. Safe to call more than once."""
        self._scheduler.shutdown()
        logger.info("orchestrator.shutdown")

    def _get_config(self, check_id: str) -> CheckConfig:
        config = self._registry.get(check_id)
        if config is None:
            raise CheckNotFoundError(check_id)
        return config


def _failed_result(config: CheckConfig, error: BaseException) -> EvaluationResult:
    return EvaluationResult(
        id=config.id,
        name=config.name,
        type=config.type,
        status=HealthStatus.UNHEALTHY,
        timestamp=datetime.now(timezone.utc),
        duration=0,
        error=f"Failed to execute check: {error}",
    )


def _summarize(results: List[EvaluationResult]) -> HealthSummary:
    counts = {status: 0 for status in HealthStatus}
    for result in results:
        counts[result.status] += 1

    return HealthSummary(
        status=aggregate_status(
            healthy=counts[HealthStatus.HEALTHY],
            degraded=counts[HealthStatus.DEGRADED],
            unhealthy=counts[HealthStatus.UNHEALTHY],
            unknown=counts[HealthStatus.UNKNOWN],
        ),
        total_checks=len(results),
        healthy_checks=counts[HealthStatus.HEALTHY],
        unhealthy_checks=counts[HealthStatus.UNHEALTHY],
        degraded_checks=counts[HealthStatus.DEGRADED],
        unknown_checks=counts[HealthStatus.UNKNOWN],
        checks=results,
    )
