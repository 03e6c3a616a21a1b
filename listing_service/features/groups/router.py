"""API router for the groups feature."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status

from listing_service.core.dependencies import PagingDep, RequestIdDep, SessionDep
from listing_service.core.pagination import Envelope, ListEnvelope
from listing_service.features.groups.schemas import GroupCreate, GroupResponse
from listing_service.features.groups.service import GroupService

router = APIRouter(prefix="/groups", tags=["groups"])


@router.get(
    "",
    response_model=ListEnvelope[GroupResponse],
    summary="List groups",
    responses={400: {"description": "Invalid paging parameter"}},
)
async def list_groups(
    paging: PagingDep,
    session: SessionDep,
    request_id: RequestIdDep,
    name: Annotated[str | None, Query(max_length=255, description="Name contains")] = None,
) -> ListEnvelope[GroupResponse]:
    page = await GroupService(session).list_groups(paging, name=name)
    return ListEnvelope[GroupResponse](
        data=[GroupResponse.model_validate(group) for group in page.items],
        meta=paging.meta(page),
        request_id=request_id,
    )


@router.post(
    "",
    response_model=Envelope[GroupResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a group",
)
async def create_group(
    payload: GroupCreate,
    session: SessionDep,
    request_id: RequestIdDep,
) -> Envelope[GroupResponse]:
    group = await GroupService(session).create_group(payload)
    await session.commit()
    return Envelope[GroupResponse](data=GroupResponse.model_validate(group), request_id=request_id)
