"""Service layer for the groups feature."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy import func, select

from listing_service.core.pagination import Listing, SortWhitelist
from listing_service.features.groups.models import Group
from listing_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from listing_service.core.dependencies import Paging
    from listing_service.core.pagination import PageResult
    from listing_service.features.groups.schemas import GroupCreate

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

GROUP_LISTING = Listing(
    name="groups",
    id_column=Group.id,
    created_column=Group.created_at,
    sorts=SortWhitelist(
        "groups",
        {"id": Group.id, "created_at": Group.created_at, "name": Group.name},
    ),
    id_type=UUID,
)


class GroupService:
    """Listing and creation of groups."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def list_statement(name: str | None = None) -> Select[Any]:
        stmt = select(Group)
        if name:
            stmt = stmt.where(func.lower(Group.name).contains(name.lower(), autoescape=True))
        return stmt

    async def list_groups(self, paging: Paging, *, name: str | None = None) -> PageResult[Any]:
        page = await paging.run(self._session, GROUP_LISTING, self.list_statement(name))
        lazy_logger.debug(
            lambda: f"service.list_groups(name={name!r}, mode={paging.mode}) -> {page.count} items",
        )
        return page

    async def create_group(self, payload: GroupCreate) -> Group:
        group = Group(name=payload.name)
        self._session.add(group)
        await self._session.flush()

        logger.info("Group created", extra={"group_id": str(group.id)})
        return group
