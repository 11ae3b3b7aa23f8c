"""Domain services package."""

from .status_rules import (
    aggregate_status,
    classify_latency,
    classify_threshold,
    worst_status,
)

__all__ = [
    "aggregate_status",
    "classify_latency",
    "classify_threshold",
    "worst_status",
]
