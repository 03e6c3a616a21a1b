"""Page metadata builder.

Pure formatting over a strategy's output: no queries are issued here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from listing_service.core.pagination.cursor import CursorCodec, CursorPayload, identifier_to_str
from listing_service.core.pagination.params import PagingMode
from listing_service.core.pagination.schemas import PageMeta
from listing_service.core.pagination.timestamps import format_timestamp

if TYPE_CHECKING:
    from datetime import datetime

    from listing_service.core.pagination.params import PagingRequest
    from listing_service.core.pagination.strategies import PageResult


def build_meta(result: PageResult[Any], mode: PagingMode, request: PagingRequest) -> PageMeta:
    """Assemble the page metadata for a served page.

    Args:
        result: Strategy output.
        mode: Mode that produced ``result``.
        request: The parsed request.

    Returns:
        PageMeta with only the fields meaningful for ``mode`` populated.
    """
    fields: dict[str, Any] = {
        "limit": request.limit,
        "count": result.count,
        "mode": mode.value,
        "has_more": result.has_more,
        "total": result.total,
    }

    if mode is PagingMode.OFFSET:
        fields["offset"] = request.offset
        if isinstance(result.next_marker, int):
            fields["next_offset"] = result.next_marker
        return PageMeta(**fields)

    current = request.cursor
    marker = result.next_marker if isinstance(result.next_marker, CursorPayload) else None
    if current is not None:
        fields["cursor"] = identifier_to_str(current.id)
        fields["cursor_enc"] = _encode(current, request.snapshot if mode is PagingMode.SNAPSHOT else None)
    if marker is not None:
        fields["next_cursor"] = identifier_to_str(marker.id)
        fields["next_cursor_enc"] = _encode(marker, marker.snapshot)

    if mode is PagingMode.SNAPSHOT and request.snapshot is not None:
        fields["snapshot"] = format_timestamp(request.snapshot)
        if current is not None and current.timestamp is not None:
            fields["cursor_ts"] = format_timestamp(current.timestamp)
        if marker is not None and marker.timestamp is not None:
            fields["next_cursor_ts"] = format_timestamp(marker.timestamp)
    return PageMeta(**fields)


def _encode(payload: CursorPayload, snapshot: datetime | None) -> str | None:
    # Bare legacy cursors have no timestamp and therefore no encoded form.
    if payload.timestamp is None:
        return None
    return CursorCodec.encode(payload.id, payload.timestamp, snapshot=snapshot)


__all__ = ["build_meta"]
