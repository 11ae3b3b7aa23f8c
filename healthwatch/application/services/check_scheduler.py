"""Independent repeating timers, one per scheduled check."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Dict, List, Set

from healthwatch.shared import get_logger

logger = get_logger(__name__)

TickCallback = Callable[[str], Awaitable[object]]


class CheckScheduler:
    """Fire ``callback(check_id)`` every ``interval_ms`` for each started id.

    Each interval spawns its own tick task, so a slow evaluation never
    delays the next tick, and any error raised by a tick is logged and
    dropped. Cancelling a timer leaves ticks that are already running
    alone; they finish and their results are still recorded.
    """

    def __init__(self, callback: TickCallback) -> None:
        self._callback = callback
        self._timers: Dict[str, asyncio.Task] = {}
        self._ticks: Set[asyncio.Task] = set()

    def start(self, check_id: str, interval_ms: float) -> None:
        """Start (or restart) the timer for ``check_id``.

        Raises:
            ValueError: If ``interval_ms`` is not positive.
            RuntimeError: If called without a running event loop.
        """
        if interval_ms <= 0:
            raise ValueError("Scheduling interval must be greater than 0.")

        loop = asyncio.get_running_loop()
        self.cancel(check_id)
        self._timers[check_id] = loop.create_task(
            self._run_timer(check_id, interval_ms / 1000),
            name=f"healthwatch-timer-{check_id}",
        )
        logger.debug(
            "scheduler.timer.started", check_id=check_id, interval_ms=interval_ms
        )

    def cancel(self, check_id: str) -> bool:
        """Cancel the timer for ``check_id``; returns whether one existed."""
        timer = self._timers.pop(check_id, None)
        if timer is None:
            return False
        timer.cancel()
        logger.debug("scheduler.timer.cancelled", check_id=check_id)
        return True

    def is_scheduled(self, check_id: str) -> bool:
        return check_id in self._timers

    def scheduled_ids(self) -> List[str]:
        return list(self._timers)

    @property
    def pending_ticks(self) -> int:
        return len(self._ticks)

    def shutdown(self) -> None:
        """Cancel every timer. Safe to call more than once."""
        for check_id in list(self._timers):
            self.cancel(check_id)

    async def _run_timer(self, check_id: str, interval_s: float) -> None:
        loop = asyncio.get_running_loop()
        while True:
            await asyncio.sleep(interval_s)
            tick = loop.create_task(self._run_tick(check_id))
            self._ticks.add(tick)
            tick.add_done_callback(self._ticks.discard)

    async def _run_tick(self, check_id: str) -> None:
        try:
            await self._callback(check_id)
        except Exception as exc:
            logger.error(
                "scheduler.tick.failed",
                check_id=check_id,
                error=str(exc),
                exc_info=exc,
            )
