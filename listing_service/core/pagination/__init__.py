"""Mode-aware pagination engine for ordered collections.

Three strategies share one parameter parser, cursor codec and meta builder:

- Offset: ``?limit=20&offset=40&sort=name:asc&with_total=true``
- Keyset: ``?mode=cursor`` then ``?cursor=<next_cursor_enc>``
- Snapshot: ``?fixed=true`` (or ``?snapshot=2025-01-15T10:30:00Z``) then
  ``?cursor=<next_cursor_enc>``; the cursor carries the snapshot instant.

Typical handler:
    request, mode = parse_paging(raw_params, config)
    result = await paginate(SessionCollection(session, deadline), LISTING, stmt, request, mode)
    return ListEnvelope(data=result.items, meta=build_meta(result, mode, request))

Offset pages can skip or repeat rows when the collection changes between
requests. Keyset and snapshot walks do not.
"""

from listing_service.core.pagination.collection import (
    Deadline,
    OrderedCollection,
    SessionCollection,
    count_statement,
)
from listing_service.core.pagination.cursor import (
    CursorCodec,
    CursorPayload,
    Identifier,
    decode_cursor,
    encode_cursor,
)
from listing_service.core.pagination.exceptions import (
    IncompatibleSort,
    InvalidCursor,
    InvalidPagingParameter,
    InvalidSnapshot,
    InvalidSortDirection,
    InvalidSortField,
    PaginationError,
    QueryTimeoutException,
)
from listing_service.core.pagination.listing import Listing
from listing_service.core.pagination.meta import build_meta
from listing_service.core.pagination.params import (
    PagingConfig,
    PagingMode,
    PagingRequest,
    parse_paging,
)
from listing_service.core.pagination.schemas import Envelope, ListEnvelope, PageMeta
from listing_service.core.pagination.sorting import (
    SortSpec,
    SortWhitelist,
    apply_sort,
    parse_sort_spec,
)
from listing_service.core.pagination.strategies import (
    PageResult,
    paginate,
    run_keyset,
    run_offset,
    run_snapshot,
)

__all__ = [
    # Cursor codec
    "CursorCodec",
    "CursorPayload",
    # Collection capability
    "Deadline",
    # Schemas
    "Envelope",
    "Identifier",
    # Errors
    "IncompatibleSort",
    "InvalidCursor",
    "InvalidPagingParameter",
    "InvalidSnapshot",
    "InvalidSortDirection",
    "InvalidSortField",
    "ListEnvelope",
    "Listing",
    "OrderedCollection",
    "PageMeta",
    # Strategies
    "PageResult",
    "PaginationError",
    # Parser
    "PagingConfig",
    "PagingMode",
    "PagingRequest",
    "QueryTimeoutException",
    "SessionCollection",
    # Sorting
    "SortSpec",
    "SortWhitelist",
    "apply_sort",
    "build_meta",
    "count_statement",
    "decode_cursor",
    "encode_cursor",
    "paginate",
    "parse_paging",
    "parse_sort_spec",
    "run_keyset",
    "run_offset",
    "run_snapshot",
]
