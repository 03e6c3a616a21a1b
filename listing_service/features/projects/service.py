"""Service layer for the projects feature."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy import func, select

from listing_service.core.pagination import Listing, SortWhitelist
from listing_service.features.projects.models import Project
from listing_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from listing_service.core.dependencies import Paging
    from listing_service.core.pagination import PageResult
    from listing_service.features.projects.schemas import ProjectCreate

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

PROJECT_LISTING = Listing(
    name="projects",
    id_column=Project.id,
    created_column=Project.created_at,
    sorts=SortWhitelist(
        "projects",
        {
            "id": Project.id,
            "created_at": Project.created_at,
            "updated_at": Project.updated_at,
            "name": Project.name,
        },
    ),
    id_type=UUID,
)


class ProjectService:
    """Service for project operations.

    Args:
        session: Database session for operations
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def list_statement(name: str | None = None) -> Select[Any]:
        """Unordered project query, narrowed to names containing ``name``."""
        stmt = select(Project)
        if name:
            stmt = stmt.where(func.lower(Project.name).contains(name.lower(), autoescape=True))
        return stmt

    async def list_projects(self, paging: Paging, *, name: str | None = None) -> PageResult[Any]:
        """Serve one page of projects.

        Args:
            paging: Parsed paging request for this call.
            name: Optional case-insensitive name filter.

        Returns:
            The page produced by the requested strategy.
        """
        page = await paging.run(self._session, PROJECT_LISTING, self.list_statement(name))
        lazy_logger.debug(
            lambda: f"service.list_projects(name={name!r}, mode={paging.mode}) -> {page.count} items",
        )
        return page

    async def create_project(self, payload: ProjectCreate) -> Project:
        project = Project(**payload.model_dump())
        self._session.add(project)
        await self._session.flush()

        logger.info(
            "Project created",
            extra={"project_id": str(project.id), "project_name": project.name},
        )
        return project
