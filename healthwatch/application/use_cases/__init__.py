"""
Use Cases Package - Application Layer

This package contains the use cases driven by the HTTP API. Each use case
delegates to the health-check orchestrator and maps results to DTOs.
"""

from .health_check_use_cases import (
    ExecuteCheckUseCase,
    GetCheckStatusUseCase,
    GetHealthSummaryUseCase,
    GetMetricsUseCase,
    ListChecksUseCase,
    RegisterCheckUseCase,
    ToggleCheckUseCase,
    UnregisterCheckUseCase,
)

__all__ = [
    "ExecuteCheckUseCase",
    "GetCheckStatusUseCase",
    "GetHealthSummaryUseCase",
    "GetMetricsUseCase",
    "ListChecksUseCase",
    "RegisterCheckUseCase",
    "ToggleCheckUseCase",
    "UnregisterCheckUseCase",
]
