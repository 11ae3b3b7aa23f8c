"""Timeout and retry policy wrapped around a single checker invocation."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from time import perf_counter
from typing import Any, Dict, Optional

from healthwatch.application.models import ExecutionDefaults, ExecutionOptions
from healthwatch.domain.entities.errors import (
    HealthCheckError,
    UnsupportedCheckTypeError,
)
from healthwatch.domain.entities.health import (
    CheckConfig,
    EvaluationResult,
    HealthStatus,
)
from healthwatch.domain.ports.health_check import IChecker
from healthwatch.shared import get_logger

logger = get_logger(__name__)


class ExecutionController:
    """Run a checker with timeout and retry-with-delay.

    Failures raised by the checker never escape: once every attempt is
    used up, they become an unhealthy ``EvaluationResult`` carrying the
    last error message and, for ``HealthCheckError``, its ``details`` as
    metadata. Configuration errors (``UnsupportedCheckTypeError``) are
    not retried and propagate.
    """

    def __init__(self, defaults: Optional[ExecutionDefaults] = None) -> None:
        self._defaults = defaults or ExecutionDefaults()

    @property
    def defaults(self) -> ExecutionDefaults:
        return self._defaults

    async def execute(
        self,
        config: CheckConfig,
        checker: IChecker,
        options: Optional[ExecutionOptions] = None,
    ) -> EvaluationResult:
        timeout_ms, retries, retry_delay_ms = self._resolve(config, options)

        timestamp = datetime.now(timezone.utc)
        start = perf_counter()
        last_error: Optional[str] = None
        last_details: Dict[str, Any] = {}

        for attempt in range(retries + 1):
            try:
                outcome = await asyncio.wait_for(
                    checker.evaluate(config, timeout_ms),
                    timeout=timeout_ms / 1000,
                )
            except UnsupportedCheckTypeError:
                raise
            except asyncio.TimeoutError:
                last_error = f"Check timed out after {timeout_ms:g}ms"
                last_details = {}
            except HealthCheckError as exc:
                last_error = exc.message or type(exc).__name__
                last_details = dict(exc.details)
            except Exception as exc:
                last_error = str(exc) or type(exc).__name__
                last_details = {}
            else:
                return EvaluationResult(
                    id=config.id,
                    name=config.name,
                    type=config.type,
                    status=outcome.status,
                    timestamp=timestamp,
                    duration=_elapsed_ms(start),
                    message=outcome.message,
                    metadata=dict(outcome.metadata),
                    retry_count=attempt,
                )

            logger.debug(
                "execution.attempt.failed",
                check_id=config.id,
                attempt=attempt,
                retries=retries,
                error=last_error,
            )
            if attempt < retries:
                await asyncio.sleep(retry_delay_ms / 1000)

        return EvaluationResult(
            id=config.id,
            name=config.name,
            type=config.type,
            status=HealthStatus.UNHEALTHY,
            timestamp=timestamp,
            duration=_elapsed_ms(start),
            error=last_error,
            metadata=last_details,
            retry_count=retries,
        )

    def _resolve(
        self,
        config: CheckConfig,
        options: Optional[ExecutionOptions],
    ) -> tuple[float, int, float]:
        options = options or ExecutionOptions()

        timeout_ms = _first_set(
            options.timeout_ms, config.timeout or None, self._defaults.timeout_ms
        )
        retries = _first_set(options.retries, config.retries, self._defaults.retries)
        retry_delay_ms = _first_set(
            options.retry_delay_ms, self._defaults.retry_delay_ms
        )
        return float(timeout_ms), max(0, int(retries)), max(0.0, float(retry_delay_ms))


def _first_set(*values):
    for value in values:
        if value is not None:
            return value
    return None


def _elapsed_ms(start: float) -> float:
    return round((perf_counter() - start) * 1000, 2)
