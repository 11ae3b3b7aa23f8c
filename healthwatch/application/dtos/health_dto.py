"""DTOs for check registration and health reporting payloads."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, model_validator

from healthwatch.domain.entities.health import (
    CheckConfig,
    CheckMetrics,
    CheckType,
    DatabaseCheckConfig,
    DatabaseType,
    EvaluationResult,
    HealthStatus,
    HealthSummary,
    HttpCheckConfig,
    HttpMethod,
    SystemCheckConfig,
    SystemResource,
    SystemResourceCheck,
)


class _CheckConfigBaseDTO(BaseModel):
    """Fields shared by every check registration payload."""

    id: str = Field(min_length=1, description="Unique check identifier")
    name: str = Field(min_length=1, description="Human readable check name")
    enabled: bool = Field(default=True, description="Whether the check runs")
    interval: int = Field(
        default=0, ge=0, description="Scheduling interval in ms (0 = manual only)"
    )
    timeout: Optional[int] = Field(
        default=None, gt=0, description="Attempt timeout in ms, engine default if unset"
    )
    retries: Optional[int] = Field(
        default=None, ge=0, description="Retries after the first try"
    )
    tags: List[str] = Field(default_factory=list, description="Free-form labels")
    metadata: Dict[str, Any] = Field(
        default_factory=dict, description="Free-form check metadata"
    )

    def _common(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "enabled": self.enabled,
            "interval": self.interval,
            "timeout": self.timeout,
            "retries": self.retries,
            "tags": set(self.tags),
            "metadata": dict(self.metadata),
        }


class HttpCheckConfigDTO(_CheckConfigBaseDTO):
    type: Literal["http"] = "http"
    url: str = Field(min_length=1, description="Endpoint URL")
    method: HttpMethod = HttpMethod.GET
    headers: Dict[str, str] = Field(default_factory=dict)
    expected_status_codes: List[int] = Field(default_factory=lambda: [200])
    expected_body: Optional[str] = Field(
        default=None, description="Substring (or pattern) the body must contain"
    )
    expected_body_regex: bool = Field(
        default=False, description="Treat expected_body as a regular expression"
    )
    follow_redirects: bool = True

    @model_validator(mode="after")
    def check_body_pattern(self) -> "HttpCheckConfigDTO":
        if self.expected_body is not None and self.expected_body_regex:
            try:
                re.compile(self.expected_body)
            except re.error as exc:
                raise ValueError(f"Invalid expected_body pattern: {exc}") from exc
        return self

    def to_domain(self) -> HttpCheckConfig:
        expected_body: Any = self.expected_body
        if expected_body is not None and self.expected_body_regex:
            expected_body = re.compile(expected_body)
        return HttpCheckConfig(
            **self._common(),
            url=self.url,
            method=self.method,
            headers=dict(self.headers),
            expected_status_codes=list(self.expected_status_codes),
            expected_body=expected_body,
            follow_redirects=self.follow_redirects,
        )


class DatabaseCheckConfigDTO(_CheckConfigBaseDTO):
    type: Literal["database"] = "database"
    connection_string: str = Field(min_length=1)
    database_type: DatabaseType
    query: Optional[str] = None
    expected_result: Optional[Any] = None

    def to_domain(self) -> DatabaseCheckConfig:
        return DatabaseCheckConfig(
            **self._common(),
            connection_string=self.connection_string,
            database_type=self.database_type,
            query=self.query,
            expected_result=self.expected_result,
        )


class SystemResourceCheckDTO(BaseModel):
    type: SystemResource
    threshold: float = Field(gt=0, description="Usage percentage threshold")
    path: Optional[str] = None


class SystemCheckConfigDTO(_CheckConfigBaseDTO):
    type: Literal["system"] = "system"
    checks: List[SystemResourceCheckDTO] = Field(min_length=1)

    def to_domain(self) -> SystemCheckConfig:
        return SystemCheckConfig(
            **self._common(),
            checks=[
                SystemResourceCheck(
                    type=check.type, threshold=check.threshold, path=check.path
                )
                for check in self.checks
            ],
        )


class CustomCheckConfigDTO(_CheckConfigBaseDTO):
    type: Literal["custom"] = "custom"

    def to_domain(self) -> CheckConfig:
        return CheckConfig(**self._common(), type=CheckType.CUSTOM)


CheckConfigDTO = Annotated[
    Union[
        HttpCheckConfigDTO,
        DatabaseCheckConfigDTO,
        SystemCheckConfigDTO,
        CustomCheckConfigDTO,
    ],
    Field(discriminator="type"),
]

check_config_adapter: TypeAdapter[Any] = TypeAdapter(CheckConfigDTO)
check_config_list_adapter: TypeAdapter[Any] = TypeAdapter(List[CheckConfigDTO])


class CheckConfigSummaryDTO(BaseModel):
    """Registered check as listed by the API."""

    id: str
    name: str
    type: CheckType
    enabled: bool
    interval: int
    timeout: Optional[int] = None
    retries: Optional[int] = None
    tags: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, config: CheckConfig) -> "CheckConfigSummaryDTO":
        return cls(
            id=config.id,
            name=config.name,
            type=config.type,
            enabled=config.enabled,
            interval=config.interval,
            timeout=config.timeout,
            retries=config.retries,
            tags=sorted(config.tags),
        )


class CheckConfigListDTO(BaseModel):
    total: int
    checks: List[CheckConfigSummaryDTO] = Field(default_factory=list)


class EvaluationResultDTO(BaseModel):
    """Serializable representation of one check execution."""

    id: str
    name: str
    type: CheckType
    status: HealthStatus
    timestamp: datetime = Field(description="Evaluation start time")
    duration: float = Field(description="Total duration in ms, retries included")
    message: Optional[str] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    retry_count: int = 0

    @classmethod
    def from_domain(cls, result: EvaluationResult) -> "EvaluationResultDTO":
        return cls(
            id=result.id,
            name=result.name,
            type=result.type,
            status=result.status,
            timestamp=result.timestamp,
            duration=result.duration,
            message=result.message,
            error=result.error,
            metadata=result.metadata,
            retry_count=result.retry_count,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "api",
                "name": "Public API",
                "type": "http",
                "status": "healthy",
                "timestamp": "2024-09-09T12:00:00Z",
                "duration": 42.17,
                "message": "HTTP check successful (200)",
                "metadata": {"status_code": 200, "url": "https://example.com"},
                "retry_count": 0,
            }
        }
    }


class CheckMetricsDTO(BaseModel):
    total_executions: int
    successful_executions: int
    failed_executions: int
    average_response_time: float
    last_execution_time: datetime
    uptime: float = Field(description="Success percentage")

    @classmethod
    def from_domain(cls, metrics: CheckMetrics) -> "CheckMetricsDTO":
        return cls(
            total_executions=metrics.total_executions,
            successful_executions=metrics.successful_executions,
            failed_executions=metrics.failed_executions,
            average_response_time=metrics.average_response_time,
            last_execution_time=metrics.last_execution_time,
            uptime=metrics.uptime,
        )


class HealthCountsDTO(BaseModel):
    total: int
    healthy: int
    unhealthy: int
    degraded: int
    unknown: int


class HealthOverviewDTO(BaseModel):
    """Compact payload of the /health endpoint."""

    status: HealthStatus
    timestamp: datetime
    checks: HealthCountsDTO

    @classmethod
    def from_domain(cls, summary: HealthSummary) -> "HealthOverviewDTO":
        return cls(
            status=summary.status,
            timestamp=summary.timestamp,
            checks=HealthCountsDTO(
                total=summary.total_checks,
                healthy=summary.healthy_checks,
                unhealthy=summary.unhealthy_checks,
                degraded=summary.degraded_checks,
                unknown=summary.unknown_checks,
            ),
        )


class HealthSummaryDTO(BaseModel):
    """Full payload of the /health/detailed endpoint."""

    status: HealthStatus
    timestamp: datetime
    total_checks: int
    healthy_checks: int
    unhealthy_checks: int
    degraded_checks: int
    unknown_checks: int
    checks: List[EvaluationResultDTO] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, summary: HealthSummary) -> "HealthSummaryDTO":
        return cls(
            status=summary.status,
            timestamp=summary.timestamp,
            total_checks=summary.total_checks,
            healthy_checks=summary.healthy_checks,
            unhealthy_checks=summary.unhealthy_checks,
            degraded_checks=summary.degraded_checks,
            unknown_checks=summary.unknown_checks,
            checks=[EvaluationResultDTO.from_domain(r) for r in summary.checks],
        )


class ToggleCheckDTO(BaseModel):
    enabled: bool


class MessageDTO(BaseModel):
    message: str
    id: Optional[str] = None


class ServiceInfoDTO(BaseModel):
    """Payload of the service root endpoint."""

    name: str
    version: str
    started_at: Optional[datetime] = None
    endpoints: Dict[str, str] = Field(default_factory=dict)
