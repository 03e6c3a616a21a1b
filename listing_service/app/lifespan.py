"""Application lifespan management.

Startup Order:
1. Logging
2. Database (connectivity check, optional table creation)

Shutdown Order: Reverse of startup.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from listing_service.core.settings import (
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from listing_service.infra.logging.config import setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


async def _startup_core() -> None:
    app = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), force=True)
    logger.info(
        "Application starting",
        extra={"service": app.service_name, "environment": app.environment},
    )


async def _startup_database() -> None:
    from listing_service.infra.database import init_database

    db = get_db_settings()
    await init_database(create_tables=db.create_tables)
    logger.info("Database ready", extra={"sqlite": db.is_sqlite})


async def _shutdown_database() -> None:
    from listing_service.infra.database import close_database

    await close_database()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start services in dependency order and stop them in reverse."""
    await _startup_core()
    await _startup_database()

    paging = get_pagination_settings()
    logger.info(
        "Application started",
        extra={
            "title": app.title,
            "default_limit": paging.default_limit,
            "max_limit": paging.max_limit,
            "query_timeout": paging.query_timeout,
        },
    )
    try:
        yield
    finally:
        logger.info("Application shutting down")
        await _shutdown_database()
