"""Modular Pydantic Settings v2 configuration.

One frozen settings model per domain, each read from environment variables
with its own prefix (APP_, DB_, LOG_, PAGINATION_) or a local ``.env`` file.

Import settings via the cached loaders:
    from listing_service.core.settings import get_app_settings

    settings = get_app_settings()
    print(settings.api_prefix)
"""

from __future__ import annotations

from .app import AppSettings
from .database import DatabaseSettings
from .loader import (
    clear_all_caches,
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from .logs import LoggingSettings
from .pagination import PaginationSettings

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "PaginationSettings",
    "clear_all_caches",
    "get_app_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_pagination_settings",
]
