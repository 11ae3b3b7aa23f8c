"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .health_dto import (
    CheckConfigDTO,
    CheckConfigListDTO,
    CheckConfigSummaryDTO,
    CheckMetricsDTO,
    CustomCheckConfigDTO,
    DatabaseCheckConfigDTO,
    EvaluationResultDTO,
    HealthCountsDTO,
    HealthOverviewDTO,
    HealthSummaryDTO,
    HttpCheckConfigDTO,
    MessageDTO,
    ServiceInfoDTO,
    SystemCheckConfigDTO,
    SystemResourceCheckDTO,
    ToggleCheckDTO,
    check_config_adapter,
    check_config_list_adapter,
)

__all__ = [
    "CheckConfigDTO",
    "CheckConfigListDTO",
    "CheckConfigSummaryDTO",
    "CheckMetricsDTO",
    "CustomCheckConfigDTO",
    "DatabaseCheckConfigDTO",
    "EvaluationResultDTO",
    "HealthCountsDTO",
    "HealthOverviewDTO",
    "HealthSummaryDTO",
    "HttpCheckConfigDTO",
    "MessageDTO",
    "ServiceInfoDTO",
    "SystemCheckConfigDTO",
    "SystemResourceCheckDTO",
    "ToggleCheckDTO",
    "check_config_adapter",
    "check_config_list_adapter",
]
