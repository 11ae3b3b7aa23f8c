"""Domain service helpers for classifying and aggregating health statuses."""

from typing import Iterable

from healthwatch.domain.entities.health import HealthStatus

DEGRADED_RATIO = 0.8

_SEVERITY = {
    HealthStatus.HEALTHY: 0,
    HealthStatus.UNKNOWN: 1,
    HealthStatus.DEGRADED: 2,
    HealthStatus.UNHEALTHY: 3,
}


def classify_latency(latency_ms: float, timeout_ms: float) -> HealthStatus:
    """Healthy, or degraded once latency exceeds 80% of the timeout."""
    if latency_ms > timeout_ms * DEGRADED_RATIO:
        return HealthStatus.DEGRADED
    return HealthStatus.HEALTHY


def classify_threshold(value: float, threshold: float) -> HealthStatus:
    """Unhealthy above ``threshold``, degraded above 80% of it."""
    if value > threshold:
        return HealthStatus.UNHEALTHY
    if value > threshold * DEGRADED_RATIO:
        return HealthStatus.DEGRADED
    return HealthStatus.HEALTHY


def worst_status(statuses: Iterable[HealthStatus]) -> HealthStatus:
    """Most severe status of a group; healthy when the group is empty."""
    return max(statuses, key=_SEVERITY.__getitem__, default=HealthStatus.HEALTHY)


def aggregate_status(
    *,
    healthy: int,
    degraded: int,
    unhealthy: int,
    unknown: int,
) -> HealthStatus:
    """Overall status of an execution batch.

    Unknown results only surface when no check in the batch is healthy.
    """
    if unhealthy > 0:
        return HealthStatus.UNHEALTHY
    if degraded > 0:
        return HealthStatus.DEGRADED
    if unknown > 0 and healthy == 0:
        return HealthStatus.UNKNOWN
    return HealthStatus.HEALTHY
