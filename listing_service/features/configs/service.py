"""Service layer for the configs feature."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy import func, select

from listing_service.core.pagination import Listing, SortWhitelist
from listing_service.features.configs.models import ConfigItem
from listing_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from listing_service.core.dependencies import Paging
    from listing_service.core.pagination import PageResult
    from listing_service.features.configs.schemas import ConfigItemCreate

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

CONFIG_LISTING = Listing(
    name="configs",
    id_column=ConfigItem.id,
    created_column=ConfigItem.created_at,
    sorts=SortWhitelist(
        "configs",
        {
            "id": ConfigItem.id,
            "created_at": ConfigItem.created_at,
            "updated_at": ConfigItem.updated_at,
            "name": ConfigItem.name,
        },
    ),
    id_type=UUID,
)


class ConfigService:
    """Listing and creation of config items."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def list_statement(name: str | None = None) -> Select[Any]:
        stmt = select(ConfigItem)
        if name:
            stmt = stmt.where(func.lower(ConfigItem.name).contains(name.lower(), autoescape=True))
        return stmt

    async def list_configs(self, paging: Paging, *, name: str | None = None) -> PageResult[Any]:
        """Serve one page of configs, optionally filtered by name."""
        page = await paging.run(self._session, CONFIG_LISTING, self.list_statement(name))
        lazy_logger.debug(
            lambda: f"service.list_configs(name={name!r}, mode={paging.mode}) -> {page.count} items",
        )
        return page

    async def create_config(self, payload: ConfigItemCreate) -> ConfigItem:
        item = ConfigItem(name=payload.name, data=payload.data)
        self._session.add(item)
        await self._session.flush()

        logger.info("Config created", extra={"config_id": str(item.id), "config_name": item.name})
        return item
