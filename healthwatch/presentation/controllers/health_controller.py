"""
Health Router - Presentation Layer

This module defines the FastAPI router exposing the health-check engine.
Result-bearing endpoints answer 503 for unhealthy, 206 for degraded and
200 otherwise.
"""

from typing import Any, Dict, List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from pydantic import ValidationError

from healthwatch.application.dtos.health_dto import (
    CheckConfigListDTO,
    CheckConfigSummaryDTO,
    CheckMetricsDTO,
    EvaluationResultDTO,
    HealthOverviewDTO,
    HealthSummaryDTO,
    MessageDTO,
    ToggleCheckDTO,
)
from healthwatch.application.use_cases.health_check_use_cases import (
    ExecuteCheckUseCase,
    GetCheckStatusUseCase,
    GetHealthSummaryUseCase,
    GetMetricsUseCase,
    ListChecksUseCase,
    RegisterCheckUseCase,
    ToggleCheckUseCase,
    UnregisterCheckUseCase,
)
from healthwatch.domain.entities.errors import (
    CheckNotFoundError,
    DuplicateCheckError,
    UnsupportedCheckTypeError,
)
from healthwatch.domain.entities.health import HealthStatus
from healthwatch.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["Health"])

REQUIRED_FIELDS = ("id", "name", "type")


def http_status_for(health_status: HealthStatus) -> int:
    if health_status is HealthStatus.UNHEALTHY:
        return status.HTTP_503_SERVICE_UNAVAILABLE
    if health_status is HealthStatus.DEGRADED:
        return status.HTTP_206_PARTIAL_CONTENT
    return status.HTTP_200_OK


def _internal_error(event: str, exc: Exception, **fields: Any) -> HTTPException:
    logger.error(event, error=str(exc), exc_info=exc, **fields)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


@router.get("", response_model=HealthOverviewDTO)
@inject
async def get_health(
    response: Response,
    use_case: GetHealthSummaryUseCase = Depends(Provide["get_health_summary_use_case"]),
) -> HealthOverviewDTO:
    """Run every enabled check and return status counts."""
    try:
        overview = await use_case.overview()
    except Exception as exc:
        raise _internal_error("health.summary.failure", exc)

    response.status_code = http_status_for(overview.status)
    return overview


@router.get("/detailed", response_model=HealthSummaryDTO)
@inject
async def get_health_detailed(
    response: Response,
    use_case: GetHealthSummaryUseCase = Depends(Provide["get_health_summary_use_case"]),
) -> HealthSummaryDTO:
    """Run every enabled check and return every result."""
    try:
        summary = await use_case.execute()
    except Exception as exc:
        raise _internal_error("health.detailed.failure", exc)

    response.status_code = http_status_for(summary.status)
    return summary


@router.get("/checks", response_model=CheckConfigListDTO)
@inject
async def list_checks(
    use_case: ListChecksUseCase = Depends(Provide["list_checks_use_case"]),
) -> CheckConfigListDTO:
    return await use_case.execute()


@router.post(
    "/checks", response_model=MessageDTO, status_code=status.HTTP_201_CREATED
)
@inject
async def register_check(
    payload: Dict[str, Any] = Body(...),
    use_case: RegisterCheckUseCase = Depends(Provide["register_check_use_case"]),
) -> MessageDTO:
    """Register a new check described by ``payload``."""
    missing = [name for name in REQUIRED_FIELDS if not payload.get(name)]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing required fields: {', '.join(missing)}",
        )

    try:
        config = await use_case.execute(payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.errors(include_url=False, include_context=False),
        )
    except DuplicateCheckError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except Exception as exc:
        raise _internal_error("health.check.register_failure", exc)

    return MessageDTO(message="Health check registered successfully", id=config.id)


@router.get("/checks/{check_id}", response_model=EvaluationResultDTO)
@inject
async def get_check_status(
    check_id: str,
    response: Response,
    use_case: GetCheckStatusUseCase = Depends(Provide["get_check_status_use_case"]),
) -> EvaluationResultDTO:
    """Return the most recent stored result of a check."""
    result = await use_case.execute(check_id)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Health check '{check_id}' not found or no results available",
        )
    response.status_code = http_status_for(result.status)
    return result


@router.get("/checks/{check_id}/history", response_model=List[EvaluationResultDTO])
@inject
async def get_check_history(
    check_id: str,
    use_case: GetCheckStatusUseCase = Depends(Provide["get_check_status_use_case"]),
) -> List[EvaluationResultDTO]:
    return await use_case.history(check_id)


@router.post("/checks/{check_id}/execute", response_model=EvaluationResultDTO)
@inject
async def execute_check(
    check_id: str,
    response: Response,
    use_case: ExecuteCheckUseCase = Depends(Provide["execute_check_use_case"]),
) -> EvaluationResultDTO:
    """Run one check immediately."""
    try:
        result = await use_case.execute(check_id)
    except CheckNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except UnsupportedCheckTypeError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        )
    except Exception as exc:
        raise _internal_error("health.check.execute_failure", exc, check_id=check_id)

    response.status_code = http_status_for(result.status)
    return result


@router.delete("/checks/{check_id}", response_model=MessageDTO)
@inject
async def unregister_check(
    check_id: str,
    use_case: UnregisterCheckUseCase = Depends(Provide["unregister_check_use_case"]),
) -> MessageDTO:
    try:
        await use_case.execute(check_id)
    except CheckNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))

    return MessageDTO(message=f"Health check '{check_id}' unregistered successfully")


@router.put("/checks/{check_id}/toggle", response_model=CheckConfigSummaryDTO)
@inject
async def toggle_check(
    check_id: str,
    toggle: ToggleCheckDTO,
    use_case: ToggleCheckUseCase = Depends(Provide["toggle_check_use_case"]),
) -> CheckConfigSummaryDTO:
    try:
        return await use_case.execute(check_id, toggle.enabled)
    except CheckNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("/metrics", response_model=Dict[str, CheckMetricsDTO])
@inject
async def get_all_metrics(
    use_case: GetMetricsUseCase = Depends(Provide["get_metrics_use_case"]),
) -> Dict[str, CheckMetricsDTO]:
    return await use_case.execute_all()


@router.get("/metrics/{check_id}", response_model=CheckMetricsDTO)
@inject
async def get_check_metrics(
    check_id: str,
    use_case: GetMetricsUseCase = Depends(Provide["get_metrics_use_case"]),
) -> CheckMetricsDTO:
    try:
        return await use_case.execute_one(check_id)
    except CheckNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
