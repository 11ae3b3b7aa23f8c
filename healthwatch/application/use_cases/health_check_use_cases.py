"""Use cases backing the health-check endpoints."""

from typing import Any, Dict, List, Optional

from healthwatch.application.dtos.health_dto import (
    CheckConfigListDTO,
    CheckConfigSummaryDTO,
    CheckMetricsDTO,
    EvaluationResultDTO,
    HealthOverviewDTO,
    HealthSummaryDTO,
    check_config_adapter,
)
from healthwatch.application.services.health_check_orchestrator import (
    HealthCheckOrchestrator,
)
from healthwatch.domain.entities.health import CheckConfig


class GetHealthSummaryUseCase:
    """Run every enabled check and return the aggregated summary."""

    def __init__(self, orchestrator: HealthCheckOrchestrator) -> None:
        self._orchestrator = orchestrator

    async def execute(self) -> HealthSummaryDTO:
        summary = await self._orchestrator.execute_all()
        return HealthSummaryDTO.from_domain(summary)

    async def overview(self) -> HealthOverviewDTO:
        summary = await self._orchestrator.execute_all()
        return HealthOverviewDTO.from_domain(summary)


class ListChecksUseCase:
    def __init__(self, orchestrator: HealthCheckOrchestrator) -> None:
        self._orchestrator = orchestrator

    async def execute(self) -> CheckConfigListDTO:
        configs = self._orchestrator.list_configs()
        return CheckConfigListDTO(
            total=len(configs),
            checks=[CheckConfigSummaryDTO.from_domain(c) for c in configs],
        )


class RegisterCheckUseCase:
    """Validate a registration payload and add the check to the engine.

    Raises:
        pydantic.ValidationError: If the payload does not describe a check.
        DuplicateCheckError: If the id is already registered.
    """

    def __init__(self, orchestrator: HealthCheckOrchestrator) -> None:
        self._orchestrator = orchestrator

    async def execute(self, payload: Dict[str, Any]) -> CheckConfig:
        config = check_config_adapter.validate_python(payload).to_domain()
        self._orchestrator.register(config)
        return config


class UnregisterCheckUseCase:
    def __init__(self, orchestrator: HealthCheckOrchestrator) -> None:
        self._orchestrator = orchestrator

    async def execute(self, check_id: str) -> None:
        self._orchestrator.unregister(check_id)


class ToggleCheckUseCase:
    def __init__(self, orchestrator: HealthCheckOrchestrator) -> None:
        self._orchestrator = orchestrator

    async def execute(self, check_id: str, enabled: bool) -> CheckConfigSummaryDTO:
        config = self._orchestrator.toggle(check_id, enabled)
        return CheckConfigSummaryDTO.from_domain(config)


class ExecuteCheckUseCase:
    def __init__(self, orchestrator: HealthCheckOrchestrator) -> None:
        self._orchestrator = orchestrator

    async def execute(self, check_id: str) -> EvaluationResultDTO:
        result = await self._orchestrator.execute_one(check_id)
        return EvaluationResultDTO.from_domain(result)


class GetCheckStatusUseCase:
    """Read stored results without re-running the check."""

    def __init__(self, orchestrator: HealthCheckOrchestrator) -> None:
        self._orchestrator = orchestrator

    async def execute(self, check_id: str) -> Optional[EvaluationResultDTO]:
        result = self._orchestrator.status_of(check_id)
        return EvaluationResultDTO.from_domain(result) if result else None

    async def history(self, check_id: str) -> List[EvaluationResultDTO]:
        return [
            EvaluationResultDTO.from_domain(result)
            for result in self._orchestrator.history_of(check_id)
        ]


class GetMetricsUseCase:
    def __init__(self, orchestrator: HealthCheckOrchestrator) -> None:
        self._orchestrator = orchestrator

    async def execute_one(self, check_id: str) -> CheckMetricsDTO:
        metrics = self._orchestrator.metrics_of(check_id)
        return CheckMetricsDTO.from_domain(metrics)

    async def execute_all(self) -> Dict[str, CheckMetricsDTO]:
        all_metrics = self._orchestrator.metrics_of()
        return {
            check_id: CheckMetricsDTO.from_domain(metrics)
            for check_id, metrics in all_metrics.items()
        }
