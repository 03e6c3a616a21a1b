"""Health checks against the service's dependencies."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from listing_service.core.database.base import utcnow
from listing_service.core.dependencies import SessionDep
from listing_service.core.schemas.common import HealthStatus
from listing_service.core.settings import get_app_settings

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class HealthService:
    """Runs dependency checks and summarizes them."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def check_database(self) -> bool:
        try:
            await self._session.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Database health check failed")
            return False
        return True

    async def check_health(self) -> dict[str, object]:
        """Run all checks.

        Returns:
            Fields of a ``HealthResponse``.
        """
        settings = get_app_settings()
        checks = {"database": await self.check_database()}
        status = HealthStatus.HEALTHY if all(checks.values()) else HealthStatus.UNHEALTHY
        return {
            "status": status,
            "timestamp": utcnow(),
            "service": settings.service_name,
            "version": settings.version,
            "checks": checks,
        }


def get_health_service(session: SessionDep) -> HealthService:
    """FastAPI dependency building a HealthService for the request session."""
    return HealthService(session)


HealthServiceDep = Annotated[HealthService, Depends(get_health_service)]
