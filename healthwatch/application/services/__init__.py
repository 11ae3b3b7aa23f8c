"""
Application Services Package

This package contains the health-check engine: execution policy,
in-memory stores, the scheduler and the orchestrator facade.
"""

from .check_scheduler import CheckScheduler
from .execution_controller import ExecutionController
from .health_check_orchestrator import HealthCheckOrchestrator
from .metrics_aggregator import MetricsAggregator
from .result_store import ResultStore

__all__ = [
    "CheckScheduler",
    "ExecutionController",
    "HealthCheckOrchestrator",
    "MetricsAggregator",
    "ResultStore",
]
