"""API router for the accounts feature.

Endpoints:
    GET  /accounts  - Paged account listing (offset, cursor or snapshot)
    POST /accounts  - Create an account
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Query, status

from listing_service.core.dependencies import PagingDep, RequestIdDep, SessionDep
from listing_service.core.pagination import Envelope, ListEnvelope
from listing_service.features.accounts.schemas import AccountCreate, AccountResponse
from listing_service.features.accounts.service import AccountService

router = APIRouter(prefix="/accounts", tags=["accounts"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=ListEnvelope[AccountResponse],
    summary="List accounts",
    description="Page through accounts. Filter by display name with `name`.",
    responses={400: {"description": "Invalid paging parameter"}},
)
async def list_accounts(
    paging: PagingDep,
    session: SessionDep,
    request_id: RequestIdDep,
    name: Annotated[str | None, Query(max_length=255, description="Display name contains")] = None,
) -> ListEnvelope[AccountResponse]:
    """List accounts one page at a time."""
    page = await AccountService(session).list_accounts(paging, name=name)
    return ListEnvelope[AccountResponse](
        data=[AccountResponse.model_validate(account) for account in page.items],
        meta=paging.meta(page),
        request_id=request_id,
    )


@router.post(
    "",
    response_model=Envelope[AccountResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    responses={409: {"description": "Username already taken"}},
)
async def create_account(
    payload: AccountCreate,
    session: SessionDep,
    request_id: RequestIdDep,
) -> Envelope[AccountResponse]:
    """Create an account."""
    account = await AccountService(session).create_account(payload)
    await session.commit()
    return Envelope[AccountResponse](
        data=AccountResponse.model_validate(account),
        request_id=request_id,
    )
