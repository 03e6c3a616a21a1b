"""Paging dependency for list endpoints.

Collects the raw paging query parameters, reads ``PaginationSettings`` once,
and hands the engine explicit values: a ``PagingConfig`` for the parser and a
``Deadline`` bounding every query issued for the request.

All parameters arrive as strings so that malformed values are rejected by the
engine with a 400 naming the parameter, not by request validation.

Usage:
    @router.get("/accounts")
    async def list_accounts(paging: PagingDep, session: SessionDep):
        result = await paging.run(session, ACCOUNT_LISTING, select(Account))
        return ListEnvelope(data=result.items, meta=paging.meta(result))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, Any

from fastapi import Depends, Query

from listing_service.core.pagination import (
    Deadline,
    PagingMode,
    PagingRequest,
    SessionCollection,
    build_meta,
    paginate,
    parse_paging,
)
from listing_service.core.settings import PaginationSettings, get_pagination_settings

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from listing_service.core.pagination import Listing, PageMeta, PageResult


@dataclass(frozen=True, slots=True)
class Paging:
    """Parsed paging request bound to its mode and deadline."""

    request: PagingRequest
    mode: PagingMode
    deadline: Deadline

    async def run(
        self,
        session: AsyncSession,
        listing: Listing,
        statement: Select[Any],
    ) -> PageResult[Any]:
        """Serve one page of ``statement`` for ``listing``."""
        collection = SessionCollection(session, self.deadline)
        return await paginate(collection, listing, statement, self.request, self.mode)

    def meta(self, result: PageResult[Any]) -> PageMeta:
        return build_meta(result, self.mode, self.request)


async def get_paging(
    settings: Annotated[PaginationSettings, Depends(get_pagination_settings)],
    limit: Annotated[str | None, Query(description="Page size, clamped to [1, 100] (default 20)")] = None,
    offset: Annotated[str | None, Query(description="Rows to skip (offset mode)")] = None,
    sort: Annotated[str | None, Query(description="field[:asc|desc]")] = None,
    cursor: Annotated[str | None, Query(description="Opaque cursor from next_cursor_enc")] = None,
    cursor_ts: Annotated[
        str | None, Query(description="Boundary timestamp for a bare identifier cursor")
    ] = None,
    snapshot: Annotated[str | None, Query(description="ISO-8601 as-of instant")] = None,
    fixed: Annotated[str | None, Query(description="Start a snapshot walk as of now")] = None,
    with_total: Annotated[str | None, Query(description="Include total (offset mode)")] = None,
    mode: Annotated[str | None, Query(description="offset | cursor | snapshot")] = None,
) -> Paging:
    """Parse paging parameters for the current request.

    Raises:
        PaginationError: On any malformed paging parameter (HTTP 400).
    """
    raw = {
        "limit": limit,
        "offset": offset,
        "sort": sort,
        "cursor": cursor,
        "cursor_ts": cursor_ts,
        "snapshot": snapshot,
        "fixed": fixed,
        "with_total": with_total,
        "mode": mode,
    }
    request, resolved = parse_paging(raw, settings.to_config())
    return Paging(
        request=request,
        mode=resolved,
        deadline=Deadline.after(settings.query_timeout),
    )


PagingDep = Annotated[Paging, Depends(get_paging)]
