"""Paging parameter parsing and mode resolution.

Turns raw query parameters into an immutable :class:`PagingRequest` and the
:class:`PagingMode` that will serve it. Resolution order:

1. a decodable ``cursor`` selects keyset mode, or snapshot mode when the
   cursor itself carries a snapshot instant;
2. otherwise a ``snapshot`` timestamp (or ``fixed=true`` / ``mode=snapshot``)
   selects snapshot mode;
3. otherwise ``mode=cursor`` starts a keyset walk from the beginning;
4. otherwise offset mode.

A cursor together with a plain ``snapshot`` parameter therefore resolves to
keyset mode.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from listing_service.core.pagination.cursor import CursorCodec, CursorPayload
from listing_service.core.pagination.exceptions import (
    IncompatibleSort,
    InvalidPagingParameter,
    InvalidSnapshot,
    PaginationError,
)
from listing_service.core.pagination.sorting import SortSpec, parse_sort_spec
from listing_service.core.pagination.timestamps import ensure_utc, parse_timestamp

logger = logging.getLogger(__name__)

_TRUTHY = frozenset({"true", "1", "yes", "on"})

KEYSET_SORTS = frozenset({SortSpec(), SortSpec("id", ascending=True)})
SNAPSHOT_SORTS = frozenset({SortSpec(), SortSpec("created_at", ascending=False)})


class PagingMode(StrEnum):
    """How a request is paged. Values are the names exposed in page meta."""

    OFFSET = "offset"
    KEYSET = "cursor"
    SNAPSHOT = "snapshot"


@dataclass(frozen=True, slots=True)
class PagingConfig:
    """Limits applied by the parser.

    Passed in explicitly so the parser never reads process-wide settings.
    """

    default_limit: int = 20
    min_limit: int = 1
    max_limit: int = 100

    def clamp(self, limit: int) -> int:
        return max(self.min_limit, min(limit, self.max_limit))


DEFAULT_PAGING_CONFIG = PagingConfig()


@dataclass(frozen=True, slots=True)
class PagingRequest:
    """Validated paging parameters for a single request.

    Attributes:
        limit: Page size, already clamped.
        offset: Rows to skip (offset mode only).
        sort: Raw sort spec as supplied.
        cursor_raw: Raw cursor as supplied.
        snapshot_raw: Raw snapshot parameter as supplied.
        with_total: Whether a total count was requested.
        cursor: Decoded cursor, if any.
        snapshot: Resolved snapshot instant (UTC), if any.
        sort_spec: Parsed form of ``sort``.
    """

    limit: int
    offset: int = 0
    sort: str | None = None
    cursor_raw: str | None = None
    snapshot_raw: str | None = None
    with_total: bool = False
    cursor: CursorPayload | None = None
    snapshot: datetime | None = None
    sort_spec: SortSpec = field(default_factory=SortSpec)


def parse_paging(
    params: Mapping[str, Any],
    config: PagingConfig = DEFAULT_PAGING_CONFIG,
    *,
    now: datetime | None = None,
) -> tuple[PagingRequest, PagingMode]:
    """Parse raw query parameters into a paging request and its mode.

    Args:
        params: Raw parameters (``limit``, ``offset``, ``sort``, ``cursor``,
            ``cursor_ts``, ``snapshot``, ``fixed``, ``with_total``, ``mode``).
        config: Limit bounds and default.
        now: Instant used for ``fixed=true``; defaults to the current time.

    Returns:
        Tuple of (PagingRequest, PagingMode).

    Raises:
        PaginationError: A subclass naming the offending parameter.
    """
    try:
        return _parse(params, config, now)
    except PaginationError as e:
        logger.warning(
            "Rejected paging parameter",
            extra={"parameter": e.parameter, "value": str(e.value), "reason": e.detail},
        )
        raise


def _parse(
    params: Mapping[str, Any],
    config: PagingConfig,
    now: datetime | None,
) -> tuple[PagingRequest, PagingMode]:
    limit = _integer(params, "limit", config.default_limit)
    offset = _integer(params, "offset", 0)
    if offset < 0:
        raise InvalidPagingParameter("offset", _text(params, "offset"), "offset must be >= 0")

    hint = _mode_hint(params)
    sort = _text(params, "sort")
    sort_spec = parse_sort_spec(sort)

    snapshot_raw = _text(params, "snapshot")
    snapshot: datetime | None = None
    if snapshot_raw is not None:
        try:
            snapshot = parse_timestamp(snapshot_raw)
        except ValueError as e:
            raise InvalidSnapshot(snapshot_raw) from e
    elif _flag(params, "fixed") or hint is PagingMode.SNAPSHOT:
        snapshot = ensure_utc(now) if now is not None else datetime.now(UTC)

    cursor_raw = _text(params, "cursor")
    cursor: CursorPayload | None = None
    if cursor_raw is not None:
        cursor = CursorCodec.decode(cursor_raw)
        if cursor.timestamp is None:
            cursor = _attach_legacy_timestamp(cursor, _text(params, "cursor_ts"))

    if cursor is not None:
        if cursor.snapshot is not None:
            mode = PagingMode.SNAPSHOT
            snapshot = cursor.snapshot
        else:
            mode = PagingMode.KEYSET
            snapshot = None
    elif snapshot is not None:
        mode = PagingMode.SNAPSHOT
    elif hint is PagingMode.KEYSET:
        mode = PagingMode.KEYSET
    else:
        mode = PagingMode.OFFSET

    if mode is PagingMode.KEYSET and sort_spec not in KEYSET_SORTS:
        raise IncompatibleSort(sort, "cursor paging only supports sort=id:asc")
    if mode is PagingMode.SNAPSHOT and sort_spec not in SNAPSHOT_SORTS:
        raise IncompatibleSort(sort, "snapshot paging only supports sort=created_at:desc")

    request = PagingRequest(
        limit=config.clamp(limit),
        offset=offset if mode is PagingMode.OFFSET else 0,
        sort=sort,
        cursor_raw=cursor_raw,
        snapshot_raw=snapshot_raw,
        with_total=_flag(params, "with_total"),
        cursor=cursor,
        snapshot=snapshot,
        sort_spec=sort_spec,
    )
    return request, mode


def _text(params: Mapping[str, Any], name: str) -> str | None:
    value = params.get(name)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _integer(params: Mapping[str, Any], name: str, default: int) -> int:
    raw = _text(params, name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidPagingParameter(name, raw, f"{name} must be an integer") from None


def _flag(params: Mapping[str, Any], name: str) -> bool:
    raw = _text(params, name)
    return raw is not None and raw.lower() in _TRUTHY


def _mode_hint(params: Mapping[str, Any]) -> PagingMode | None:
    raw = _text(params, "mode")
    if raw is None:
        return None
    try:
        return PagingMode(raw.lower())
    except ValueError:
        raise InvalidPagingParameter(
            "mode", raw, "mode must be one of offset, cursor, snapshot"
        ) from None


def _attach_legacy_timestamp(cursor: CursorPayload, raw: str | None) -> CursorPayload:
    # A malformed cursor_ts is ignored rather than rejected.
    if raw is None:
        return cursor
    try:
        return cursor.with_timestamp(parse_timestamp(raw))
    except ValueError:
        logger.debug("Ignoring malformed cursor_ts", extra={"value": raw})
        return cursor


__all__ = [
    "DEFAULT_PAGING_CONFIG",
    "PagingConfig",
    "PagingMode",
    "PagingRequest",
    "parse_paging",
]
