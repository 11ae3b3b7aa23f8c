"""Lightweight settings structures consumed by the execution controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from healthwatch.shared.consts import (
    DEFAULT_RETRIES,
    DEFAULT_RETRY_DELAY_MS,
    DEFAULT_TIMEOUT_MS,
)


@dataclass(frozen=True)
class ExecutionDefaults:
    """Engine-wide fallbacks used when neither call nor config set a value."""

    timeout_ms: float = DEFAULT_TIMEOUT_MS
    retries: int = DEFAULT_RETRIES
    retry_delay_ms: float = DEFAULT_RETRY_DELAY_MS


@dataclass(frozen=True)
class ExecutionOptions:
    """Per-call overrides; ``None`` falls through to the check config."""

    timeout_ms: Optional[float] = None
    retries: Optional[int] = None
    retry_delay_ms: Optional[float] = None
