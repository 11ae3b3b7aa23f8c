"""Domain ports for evaluating checks and publishing health events."""

from __future__ import annotations

from typing import Protocol

from healthwatch.domain.entities.health import (
    CheckConfig,
    CheckOutcome,
    CheckType,
    EvaluationResult,
    HealthSummary,
)


class IChecker(Protocol):
    """Evaluates one category of checks.

    Implementations must finish or fail within ``timeout_ms`` and release
    every connection or socket they open on all exit paths.
    """

    check_type: CheckType

    async def evaluate(self, config: CheckConfig, timeout_ms: float) -> CheckOutcome:
        """Run one attempt against the target described by ``config``.

        Raises:
            CheckerError: If the attempt fails.
            UnsupportedCheckTypeError: If the configuration cannot be
                evaluated by this checker at all.
        """
        ...


class IHealthEventSink(Protocol):
    """Receives structured events after executions."""

    def result_recorded(self, result: EvaluationResult) -> None:
        """Called after every single-check execution."""

    def summary_generated(self, summary: HealthSummary) -> None:
        """Called after every all-checks execution."""
