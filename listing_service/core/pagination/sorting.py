"""Sort whitelists and sort-spec parsing.

Each listable collection declares exactly which fields a client may order by.
A sort spec has the grammar ``field`` | ``field:asc`` | ``field:desc``; the
direction defaults to ascending and an empty spec means "no explicit order".

Example:
    ACCOUNT_SORTS = SortWhitelist(
        "accounts",
        {"id": Account.id, "created_at": Account.created_at},
    )
    stmt = apply_sort(select(Account), ACCOUNT_SORTS, "created_at:desc")
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from listing_service.core.pagination.exceptions import InvalidSortDirection, InvalidSortField

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.orm import InstrumentedAttribute
    from sqlalchemy.sql.elements import UnaryExpression

_DIRECTIONS = {"asc": True, "desc": False}


@dataclass(frozen=True, slots=True)
class SortSpec:
    """Parsed sort spec.

    Attributes:
        field: Field name, or None when no ordering was requested.
        ascending: Sort direction.
    """

    field: str | None = None
    ascending: bool = True

    @property
    def is_empty(self) -> bool:
        return self.field is None

    @property
    def direction(self) -> str:
        return "asc" if self.ascending else "desc"

    def __str__(self) -> str:
        if self.field is None:
            return ""
        return f"{self.field}:{self.direction}"


def parse_sort_spec(spec: str | None) -> SortSpec:
    """Parse ``field[:asc|desc]``.

    Args:
        spec: Raw sort parameter (None or blank means no ordering).

    Returns:
        SortSpec

    Raises:
        InvalidSortField: If the field part is blank.
        InvalidSortDirection: If the direction is not asc/desc.
    """
    if spec is None or not spec.strip():
        return SortSpec()
    field, sep, direction = spec.partition(":")
    field = field.strip()
    if not field:
        raise InvalidSortField(spec)
    token = direction.strip().lower() if sep else "asc"
    if token not in _DIRECTIONS:
        raise InvalidSortDirection(token, f"invalid sort direction: {token!r}")
    return SortSpec(field=field, ascending=_DIRECTIONS[token])


class SortWhitelist:
    """Allow-list of orderable fields for one collection type.

    Attributes:
        collection: Collection name used in error messages and logs.
    """

    __slots__ = ("collection", "_fields")

    def __init__(
        self,
        collection: str,
        fields: Mapping[str, InstrumentedAttribute[Any]],
    ) -> None:
        self.collection = collection
        self._fields = dict(fields)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def __contains__(self, field: object) -> bool:
        return field in self._fields

    def resolve(self, field: str) -> InstrumentedAttribute[Any]:
        """Return the column for a whitelisted field.

        Raises:
            InvalidSortField: If the field is not whitelisted.
        """
        try:
            return self._fields[field]
        except KeyError:
            raise InvalidSortField(
                field,
                f"invalid sort field {field!r} for {self.collection}; "
                f"allowed: {', '.join(sorted(self._fields))}",
            ) from None

    def modifier(self, spec: SortSpec) -> UnaryExpression[Any]:
        """Ordering clause for a non-empty spec."""
        if spec.field is None:
            msg = "empty sort spec has no modifier"
            raise ValueError(msg)
        column = self.resolve(spec.field)
        return column.asc() if spec.ascending else column.desc()

    def __repr__(self) -> str:
        return f"SortWhitelist({self.collection!r}, fields={sorted(self._fields)!r})"


def apply_sort(
    statement: Select[Any],
    whitelist: SortWhitelist,
    spec: str | SortSpec | None,
    *,
    tie_breaker: InstrumentedAttribute[Any] | None = None,
) -> Select[Any]:
    """Apply a validated sort spec to a statement.

    Args:
        statement: Statement to order.
        whitelist: The collection's sort whitelist.
        spec: Raw or parsed sort spec; empty leaves the statement untouched.
        tie_breaker: Column appended in the same direction to make the order
            total, unless it is the sort column itself.

    Returns:
        Ordered statement.

    Raises:
        InvalidSortField: Unknown field.
        InvalidSortDirection: Bad direction token.
    """
    parsed = spec if isinstance(spec, SortSpec) else parse_sort_spec(spec)
    if parsed.is_empty:
        return statement
    statement = statement.order_by(whitelist.modifier(parsed))
    if tie_breaker is not None and whitelist.resolve(parsed.field) is not tie_breaker:  # type: ignore[arg-type]
        statement = statement.order_by(tie_breaker.asc() if parsed.ascending else tie_breaker.desc())
    return statement


__all__ = [
    "SortSpec",
    "SortWhitelist",
    "apply_sort",
    "parse_sort_spec",
]
