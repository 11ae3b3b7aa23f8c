"""Service root endpoint listing the available API routes."""

from fastapi import APIRouter, Request

from healthwatch.application.dtos.health_dto import ServiceInfoDTO

router = APIRouter(tags=["Service"])

ENDPOINTS = {
    "health": "/api/health",
    "detailed": "/api/health/detailed",
    "checks": "/api/health/checks",
    "metrics": "/api/health/metrics",
    "docs": "/docs",
}


@router.get("/", response_model=ServiceInfoDTO)
async def get_service_info(request: Request) -> ServiceInfoDTO:
    return ServiceInfoDTO(
        name=request.app.title,
        version=request.app.version,
        started_at=getattr(request.app.state, "started_at", None),
        endpoints=ENDPOINTS,
    )
