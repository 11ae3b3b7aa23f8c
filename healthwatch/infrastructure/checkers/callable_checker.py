"""Checker adapter for custom probes supplied as coroutine functions."""

from __future__ import annotations

from typing import Awaitable, Callable

from healthwatch.domain.entities.health import CheckConfig, CheckOutcome, CheckType

CustomProbe = Callable[[CheckConfig, float], Awaitable[CheckOutcome]]


class CallableChecker:
    """Delegate evaluation of custom checks to a user-supplied coroutine."""

    check_type = CheckType.CUSTOM

    def __init__(self, probe: CustomProbe) -> None:
        self._probe = probe

    async def evaluate(self, config: CheckConfig, timeout_ms: float) -> CheckOutcome:
        return await self._probe(config, timeout_ms)
