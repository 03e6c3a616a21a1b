"""FastAPI dependencies for route handlers.

Usage:
    from listing_service.core.dependencies import PagingDep, SessionDep

    @router.get("/accounts")
    async def list_accounts(paging: PagingDep, session: SessionDep):
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from listing_service.core.dependencies.database import get_db_session
from listing_service.core.dependencies.pagination import Paging, PagingDep, get_paging
from listing_service.core.dependencies.request import RequestIdDep, get_request_id

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]

__all__ = [
    "Paging",
    "PagingDep",
    "RequestIdDep",
    "SessionDep",
    "get_db_session",
    "get_paging",
    "get_request_id",
]
