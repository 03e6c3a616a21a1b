"""Health feature."""

from __future__ import annotations

from .router import router
from .schemas import HealthResponse
from .service import HealthService, HealthServiceDep, get_health_service

__all__ = [
    "HealthResponse",
    "HealthService",
    "HealthServiceDep",
    "get_health_service",
    "router",
]
