"""Health check endpoint.

``GET /health`` answers 200 when every dependency check passes and 503
otherwise, with the same body in both cases.
"""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from listing_service.core.schemas.common import HealthStatus
from listing_service.features.health.schemas import HealthResponse

# Must be imported at runtime for FastAPI to resolve the Depends() metadata
from listing_service.features.health.service import HealthServiceDep  # noqa: TC001

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    responses={503: {"description": "A dependency is unavailable"}},
)
async def health_check(service: HealthServiceDep, response: Response) -> HealthResponse:
    result = HealthResponse(**await service.check_health())
    if result.status is HealthStatus.UNHEALTHY:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return result
