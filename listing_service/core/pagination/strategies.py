"""The three pagination strategies.

Each strategy shapes a filtered ``Select`` (predicates, ordering, limit), runs
it through an :class:`OrderedCollection` and turns the returned rows into a
:class:`PageResult`. ``has_more`` is true exactly when a full page came back,
so a final full page is followed by one empty page.

Offset:
    Whitelisted sort (default ``created_at desc, id desc``), then
    ``OFFSET n LIMIT m``. Rows inserted or deleted between requests can be
    skipped or repeated; clients needing a stable walk use keyset or snapshot.

Keyset:
    ``ORDER BY id ASC`` with ``id > cursor.id``. Identifiers only grow, so a
    passed row never reappears.

Snapshot:
    ``created_at <= snapshot ORDER BY created_at DESC, id DESC`` continued
    with ``created_at < ts OR (created_at = ts AND id < cursor.id)``. The
    as-of boundary is fixed once, so later inserts never appear.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy import and_, or_

from listing_service.core.pagination.cursor import CursorPayload
from listing_service.core.pagination.params import PagingMode
from listing_service.core.pagination.sorting import SortSpec, apply_sort
from listing_service.core.pagination.timestamps import ensure_utc
from listing_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from sqlalchemy import Select

    from listing_service.core.pagination.collection import OrderedCollection
    from listing_service.core.pagination.listing import Listing
    from listing_service.core.pagination.params import PagingRequest

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PageResult(Generic[T]):
    """One page produced by a strategy.

    Attributes:
        items: Rows in page order.
        has_more: True when the page is full.
        next_marker: Next offset (offset mode) or boundary cursor (seek modes).
        total: Row count under the same filters, when requested.
    """

    items: Sequence[T]
    has_more: bool
    next_marker: CursorPayload | int | None = None
    total: int | None = None

    @property
    def count(self) -> int:
        return len(self.items)


async def run_offset(
    collection: OrderedCollection,
    listing: Listing,
    statement: Select[Any],
    *,
    limit: int,
    offset: int = 0,
    with_total: bool = False,
    sort: str | SortSpec | None = None,
) -> PageResult[Any]:
    """Skip ``offset`` rows and take ``limit`` under the requested sort.

    Raises:
        InvalidSortField: Sort field not whitelisted for the listing.
        InvalidSortDirection: Bad direction token.
    """
    filtered = statement.order_by(None)
    ordered = apply_sort(filtered, listing.sorts, sort, tie_breaker=listing.id_column)
    if ordered is filtered:
        ordered = filtered.order_by(listing.created_column.desc(), listing.id_column.desc())
    page = ordered.offset(offset).limit(limit)
    lazy_logger.debug(lambda: f"pagination.offset[{listing.name}]: {page}")

    items = await collection.fetch(page)
    total = await collection.count(filtered) if with_total else None
    return PageResult(
        items=items,
        has_more=len(items) == limit,
        next_marker=offset + len(items),
        total=total,
    )


async def run_keyset(
    collection: OrderedCollection,
    listing: Listing,
    statement: Select[Any],
    *,
    limit: int,
    cursor: CursorPayload | None = None,
) -> PageResult[Any]:
    """Take ``limit`` rows with identifiers above the cursor, ascending.

    Raises:
        InvalidCursor: The cursor's identifier variant does not fit the listing.
    """
    page = statement.order_by(None)
    if cursor is not None:
        listing.check_cursor(cursor)
        page = page.where(listing.id_column > cursor.id)
    page = page.order_by(listing.id_column.asc()).limit(limit)
    lazy_logger.debug(lambda: f"pagination.keyset[{listing.name}]: {page}")

    items = await collection.fetch(page)
    return _seek_result(listing, items, limit)


async def run_snapshot(
    collection: OrderedCollection,
    listing: Listing,
    statement: Select[Any],
    *,
    limit: int,
    snapshot: datetime,
    cursor: CursorPayload | None = None,
) -> PageResult[Any]:
    """Walk rows created at or before ``snapshot``, newest first.

    A cursor whose timestamp lies after the snapshot yields an empty final
    page without querying. A cursor without a timestamp continues by
    identifier alone.

    Raises:
        InvalidCursor: The cursor's identifier variant does not fit the listing.
    """
    snapshot = ensure_utc(snapshot)
    created, ident = listing.created_column, listing.id_column

    if cursor is not None:
        listing.check_cursor(cursor)
        if cursor.timestamp is not None and cursor.timestamp > snapshot:
            logger.warning(
                "Snapshot cursor lies beyond its snapshot",
                extra={"listing": listing.name, "cursor_id": str(cursor.id)},
            )
            return PageResult(items=(), has_more=False)

    page = statement.order_by(None).where(created <= snapshot)
    if cursor is not None:
        if cursor.timestamp is not None:
            boundary = cursor.timestamp
            page = page.where(
                or_(created < boundary, and_(created == boundary, ident < cursor.id))
            )
        else:
            page = page.where(ident < cursor.id)
    page = page.order_by(created.desc(), ident.desc()).limit(limit)
    lazy_logger.debug(lambda: f"pagination.snapshot[{listing.name}]: {page}")

    items = await collection.fetch(page)
    return _seek_result(listing, items, limit, snapshot=snapshot)


def _seek_result(
    listing: Listing,
    items: Sequence[Any],
    limit: int,
    *,
    snapshot: datetime | None = None,
) -> PageResult[Any]:
    # The marker comes from the last row under the same ordering used to fetch.
    marker = None
    if items:
        last = items[-1]
        marker = CursorPayload(
            id=listing.identifier_of(last),
            timestamp=listing.created_of(last),
            snapshot=snapshot,
        )
    return PageResult(items=items, has_more=len(items) == limit, next_marker=marker)


async def paginate(
    collection: OrderedCollection,
    listing: Listing,
    statement: Select[Any],
    request: PagingRequest,
    mode: PagingMode,
) -> PageResult[Any]:
    """Dispatch a parsed request to its strategy."""
    if mode is PagingMode.KEYSET:
        return await run_keyset(
            collection, listing, statement, limit=request.limit, cursor=request.cursor
        )
    if mode is PagingMode.SNAPSHOT:
        if request.snapshot is None:
            msg = "snapshot mode requires a resolved snapshot"
            raise ValueError(msg)
        return await run_snapshot(
            collection,
            listing,
            statement,
            limit=request.limit,
            snapshot=request.snapshot,
            cursor=request.cursor,
        )
    return await run_offset(
        collection,
        listing,
        statement,
        limit=request.limit,
        offset=request.offset,
        with_total=request.with_total,
        sort=request.sort_spec,
    )


__all__ = [
    "PageResult",
    "paginate",
    "run_keyset",
    "run_offset",
    "run_snapshot",
]
