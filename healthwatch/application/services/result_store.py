"""Bounded in-memory history of evaluation results per check."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Dict, List, Optional

from healthwatch.domain.entities.health import EvaluationResult
from healthwatch.shared.consts import DEFAULT_HISTORY_CAPACITY


class ResultStore:
    """Keep the most recent ``capacity`` results for every check id."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("History capacity must be greater than 0.")
        self._capacity = capacity
        self._results: Dict[str, Deque[EvaluationResult]] = {}
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def record(self, check_id: str, result: EvaluationResult) -> None:
        with self._lock:
            history = self._results.get(check_id)
            if history is None:
                history = deque(maxlen=self._capacity)
                self._results[check_id] = history
            history.append(result)

    def latest(self, check_id: str) -> Optional[EvaluationResult]:
        with self._lock:
            history = self._results.get(check_id)
            return history[-1] if history else None

    def history(self, check_id: str) -> List[EvaluationResult]:
        """Stored results, oldest first."""
        with self._lock:
            return list(self._results.get(check_id, ()))

    def drop(self, check_id: str) -> None:
        with self._lock:
            self._results.pop(check_id, None)
