"""Response schemas for paged listings.

Every list endpoint answers with the same envelope::

    {
        "code": "OK",
        "message": "success",
        "data": [...],
        "meta": {"limit": 20, "count": 20, "mode": "cursor", "has_more": true, ...},
        "request_id": "..."
    }

Fields of :class:`PageMeta` that do not apply to the page's mode are left out
of the JSON entirely rather than rendered as ``null``.
"""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer

T = TypeVar("T")


class PageMeta(BaseModel):
    """Pagination metadata for one page.

    Attributes:
        limit: Effective page size after clamping.
        count: Rows actually returned.
        mode: offset, cursor or snapshot.
        has_more: True when the page was full.
        offset: Rows skipped (offset mode).
        next_offset: Offset of the following page (offset mode).
        cursor: Identifier of the incoming cursor.
        next_cursor: Identifier of the last row on this page.
        cursor_enc: Encoded form of the incoming cursor.
        next_cursor_enc: Encoded cursor for the following page.
        snapshot: Fixed as-of instant (snapshot mode).
        cursor_ts: Boundary timestamp of the incoming cursor (snapshot mode).
        next_cursor_ts: Boundary timestamp of the last row (snapshot mode).
        total: Row count under the same filters, when requested.
    """

    limit: int = Field(description="Effective page size")
    count: int = Field(description="Rows returned in this page")
    mode: Literal["offset", "cursor", "snapshot"] = Field(description="Paging mode")
    has_more: bool = Field(description="Whether the page was full")
    offset: int | None = Field(default=None, description="Rows skipped")
    next_offset: int | None = Field(default=None, description="Offset of the next page")
    cursor: str | None = Field(default=None, description="Incoming cursor identifier")
    next_cursor: str | None = Field(default=None, description="Last identifier on this page")
    cursor_enc: str | None = Field(default=None, description="Encoded incoming cursor")
    next_cursor_enc: str | None = Field(default=None, description="Cursor for the next page")
    snapshot: str | None = Field(default=None, description="Snapshot instant (RFC 3339)")
    cursor_ts: str | None = Field(default=None, description="Incoming boundary timestamp")
    next_cursor_ts: str | None = Field(default=None, description="Next boundary timestamp")
    total: int | None = Field(default=None, description="Total rows (optional)")

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {key: value for key, value in data.items() if value is not None}


class Envelope(BaseModel, Generic[T]):
    """Single-object response envelope."""

    code: str = "OK"
    message: str = "success"
    data: T
    request_id: str | None = None


class ListEnvelope(BaseModel, Generic[T]):
    """Paged list response envelope.

    Usage:
        @router.get("", response_model=ListEnvelope[AccountResponse])
        async def list_accounts(...):
            page = await service.list_accounts(...)
            return ListEnvelope(data=page.items, meta=build_meta(page, mode, request))
    """

    code: str = "OK"
    message: str = "success"
    data: list[T] = Field(default_factory=list)
    meta: PageMeta
    request_id: str | None = None


__all__ = [
    "Envelope",
    "ListEnvelope",
    "PageMeta",
]
