"""Client-input errors raised by the pagination engine.

Every error names the offending query parameter and echoes the raw value so
the caller can correct the request. They all render as HTTP 400 problem
details through the application's AppException handler.
"""

from __future__ import annotations

from typing import Any

from listing_service.core.exceptions import BadRequestException, GatewayTimeoutException

ERROR_CODE = "E_INVALID_PARAM"


class PaginationError(BadRequestException):
    """Base class for rejected paging parameters.

    Attributes:
        parameter: Name of the query parameter that failed validation.
        value: Raw value supplied by the client.
    """

    error_type = "invalid-paging-parameter"
    message = "invalid paging parameter"

    def __init__(self, parameter: str, value: Any, detail: str | None = None) -> None:
        self.parameter = parameter
        self.value = value
        super().__init__(
            detail=detail or f"{self.message}: {value!r}",
            type=self.error_type,
            extra={"code": ERROR_CODE, "parameter": parameter, "value": value},
        )


class InvalidPagingParameter(PaginationError):
    """limit/offset/mode could not be interpreted."""


class InvalidSnapshot(PaginationError):
    """The snapshot parameter is not an absolute timestamp."""

    error_type = "invalid-snapshot"
    message = "invalid snapshot"

    def __init__(self, value: Any, detail: str | None = None) -> None:
        super().__init__("snapshot", value, detail)


class InvalidCursor(PaginationError):
    """The cursor is neither a bare identifier nor a recognised payload."""

    error_type = "invalid-cursor"
    message = "invalid cursor"

    def __init__(self, value: Any, detail: str | None = None) -> None:
        super().__init__("cursor", value, detail)


class InvalidSortField(PaginationError):
    """The sort field is not whitelisted for the collection."""

    error_type = "invalid-sort-field"
    message = "invalid sort field"

    def __init__(self, value: Any, detail: str | None = None) -> None:
        super().__init__("sort", value, detail)


class InvalidSortDirection(PaginationError):
    """The sort direction token is neither asc nor desc."""

    error_type = "invalid-sort-direction"
    message = "invalid sort direction"

    def __init__(self, value: Any, detail: str | None = None) -> None:
        super().__init__("sort", value, detail)


class IncompatibleSort(PaginationError):
    """The sort spec is not permitted under the resolved paging mode."""

    error_type = "incompatible-sort"
    message = "sort not supported in this paging mode"

    def __init__(self, value: Any, detail: str | None = None) -> None:
        super().__init__("sort", value, detail)


class QueryTimeoutException(GatewayTimeoutException):
    """A page or count query did not finish before the request deadline."""

    def __init__(self, timeout: float | None = None) -> None:
        super().__init__(
            detail="query deadline exceeded",
            type="query-timeout",
            extra={"timeout": timeout} if timeout is not None else None,
        )


__all__ = [
    "ERROR_CODE",
    "IncompatibleSort",
    "InvalidCursor",
    "InvalidPagingParameter",
    "InvalidSnapshot",
    "InvalidSortDirection",
    "InvalidSortField",
    "PaginationError",
    "QueryTimeoutException",
]
