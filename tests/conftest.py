from __future__ import annotations

import asyncio
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

import pytest

from healthwatch.application.models import ExecutionDefaults
from healthwatch.application.services import (
    ExecutionController,
    HealthCheckOrchestrator,
    MetricsAggregator,
    ResultStore,
)
from healthwatch.domain.entities.health import (
    CheckConfig,
    CheckOutcome,
    CheckType,
    EvaluationResult,
    HealthStatus,
    HealthSummary,
)

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


Step = Union[CheckOutcome, BaseException]


class ScriptedChecker:
    """Checker double replaying a fixed list of outcomes or exceptions.

    The last step repeats once the script is exhausted.
    """

    def __init__(
        self,
        steps: Sequence[Step],
        check_type: CheckType = CheckType.CUSTOM,
        delay: float = 0.0,
    ) -> None:
        self.check_type = check_type
        self._steps = list(steps)
        self._delay = delay
        self.calls = 0
        self.timeouts: List[float] = []

    async def evaluate(self, config: CheckConfig, timeout_ms: float) -> CheckOutcome:
        self.calls += 1
        self.timeouts.append(timeout_ms)
        if self._delay:
            await asyncio.sleep(self._delay)
        step = self._steps[min(self.calls - 1, len(self._steps) - 1)]
        if isinstance(step, BaseException):
            raise step
        return step


class RecordingSink:
    def __init__(self) -> None:
        self.results: List[EvaluationResult] = []
        self.summaries: List[HealthSummary] = []

    def result_recorded(self, result: EvaluationResult) -> None:
        self.results.append(result)

    def summary_generated(self, summary: HealthSummary) -> None:
        self.summaries.append(summary)


def outcome(
    status: HealthStatus = HealthStatus.HEALTHY,
    message: Optional[str] = "ok",
    **metadata: Any,
) -> CheckOutcome:
    return CheckOutcome(status=status, message=message, metadata=metadata)


def make_result(
    check_id: str = "api",
    status: HealthStatus = HealthStatus.HEALTHY,
    duration: float = 10.0,
    **kwargs: Any,
) -> EvaluationResult:
    return EvaluationResult(
        id=check_id,
        name=kwargs.pop("name", check_id.title()),
        type=kwargs.pop("type", CheckType.CUSTOM),
        status=status,
        timestamp=kwargs.pop("timestamp", datetime.now(timezone.utc)),
        duration=duration,
        **kwargs,
    )


@pytest.fixture()
def fast_controller() -> ExecutionController:
    return ExecutionController(
        ExecutionDefaults(timeout_ms=1000, retries=0, retry_delay_ms=0)
    )


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def make_orchestrator(fast_controller, sink):
    def _factory(**checkers: ScriptedChecker) -> HealthCheckOrchestrator:
        return HealthCheckOrchestrator(
            {CheckType(name): checker for name, checker in checkers.items()},
            execution_controller=fast_controller,
            result_store=ResultStore(),
            metrics=MetricsAggregator(),
            event_sink=sink,
        )

    return _factory
