"""API router for the projects feature.

Endpoints:
    GET  /projects  - Paged project listing
    POST /projects  - Register a project
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status

from listing_service.core.dependencies import PagingDep, RequestIdDep, SessionDep
from listing_service.core.pagination import Envelope, ListEnvelope
from listing_service.features.projects.schemas import ProjectCreate, ProjectResponse
from listing_service.features.projects.service import ProjectService

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=ListEnvelope[ProjectResponse],
    summary="List projects",
    description="Page through projects. Filter by name with `name`.",
    responses={400: {"description": "Invalid paging parameter"}},
)
async def list_projects(
    paging: PagingDep,
    session: SessionDep,
    request_id: RequestIdDep,
    name: Annotated[str | None, Query(max_length=255, description="Name contains")] = None,
) -> ListEnvelope[ProjectResponse]:
    """List projects one page at a time."""
    page = await ProjectService(session).list_projects(paging, name=name)
    return ListEnvelope[ProjectResponse](
        data=[ProjectResponse.model_validate(project) for project in page.items],
        meta=paging.meta(page),
        request_id=request_id,
    )


@router.post(
    "",
    response_model=Envelope[ProjectResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
)
async def create_project(
    payload: ProjectCreate,
    session: SessionDep,
    request_id: RequestIdDep,
) -> Envelope[ProjectResponse]:
    """Register a project."""
    project = await ProjectService(session).create_project(payload)
    await session.commit()
    return Envelope[ProjectResponse](
        data=ProjectResponse.model_validate(project),
        request_id=request_id,
    )
