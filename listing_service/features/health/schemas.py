"""Health check response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from listing_service.core.schemas.common import HealthStatus


class HealthResponse(BaseModel):
    """Service health with per-dependency results.

    Example:
        ```json
        {
            "status": "healthy",
            "timestamp": "2025-01-01T00:00:00Z",
            "service": "listing-service",
            "version": "0.1.0",
            "checks": {"database": true}
        }
        ```
    """

    status: HealthStatus = Field(description="Health status (healthy, unhealthy)")
    timestamp: datetime = Field(description="Check timestamp")
    service: str = Field(min_length=1, max_length=100, description="Service name")
    version: str = Field(min_length=1, max_length=50, description="Service version")
    checks: dict[str, bool] = Field(
        default_factory=dict, description="Individual dependency health checks"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "timestamp": "2025-01-01T00:00:00Z",
                "service": "listing-service",
                "version": "0.1.0",
                "checks": {"database": True},
            }
        },
    )
