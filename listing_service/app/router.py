"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from listing_service.core.settings import get_app_settings
from listing_service.features.accounts.router import router as accounts_router
from listing_service.features.configs.router import router as configs_router
from listing_service.features.groups.router import router as groups_router
from listing_service.features.health.router import router as health_router
from listing_service.features.projects.router import router as projects_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from listing_service.core.settings.app import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers with the application.

    Args:
        app: FastAPI application instance.
        app_settings: Optional application settings override for the API prefix.
    """
    app_settings = app_settings or get_app_settings()
    api_prefix = app_settings.api_prefix

    app.include_router(accounts_router, prefix=api_prefix)
    app.include_router(configs_router, prefix=api_prefix)
    app.include_router(projects_router, prefix=api_prefix)
    app.include_router(groups_router, prefix=api_prefix)
    app.include_router(health_router, prefix=api_prefix)

    logger.debug("Routers registered", extra={"api_prefix": api_prefix})
