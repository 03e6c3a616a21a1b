"""API router for the configs feature."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status

from listing_service.core.dependencies import PagingDep, RequestIdDep, SessionDep
from listing_service.core.pagination import Envelope, ListEnvelope
from listing_service.features.configs.schemas import ConfigItemCreate, ConfigItemResponse
from listing_service.features.configs.service import ConfigService

router = APIRouter(prefix="/configs", tags=["configs"])


@router.get(
    "",
    response_model=ListEnvelope[ConfigItemResponse],
    summary="List configs",
    responses={400: {"description": "Invalid paging parameter"}},
)
async def list_configs(
    paging: PagingDep,
    session: SessionDep,
    request_id: RequestIdDep,
    name: Annotated[str | None, Query(max_length=255, description="Name contains")] = None,
) -> ListEnvelope[ConfigItemResponse]:
    page = await ConfigService(session).list_configs(paging, name=name)
    return ListEnvelope[ConfigItemResponse](
        data=[ConfigItemResponse.model_validate(item) for item in page.items],
        meta=paging.meta(page),
        request_id=request_id,
    )


@router.post(
    "",
    response_model=Envelope[ConfigItemResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a config",
)
async def create_config(
    payload: ConfigItemCreate,
    session: SessionDep,
    request_id: RequestIdDep,
) -> Envelope[ConfigItemResponse]:
    item = await ConfigService(session).create_config(payload)
    await session.commit()
    return Envelope[ConfigItemResponse](
        data=ConfigItemResponse.model_validate(item),
        request_id=request_id,
    )
