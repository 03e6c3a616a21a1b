"""Configs feature: named JSON configuration documents."""

from __future__ import annotations

from .models import ConfigItem
from .router import router
from .schemas import ConfigItemCreate, ConfigItemResponse
from .service import CONFIG_LISTING, ConfigService

__all__ = [
    "CONFIG_LISTING",
    "ConfigItem",
    "ConfigItemCreate",
    "ConfigItemResponse",
    "ConfigService",
    "router",
]
