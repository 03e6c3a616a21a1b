"""Per-collection capability handed to the generic pagination engine.

A concrete entity type never reimplements paging. It only describes itself:
which column is the identifier, which column records creation time, and which
fields clients may sort by.

Example:
    ACCOUNTS = Listing(
        name="accounts",
        id_column=Account.id,
        created_column=Account.created_at,
        sorts=SortWhitelist("accounts", {...}),
        id_type=int,
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from uuid import UUID

from listing_service.core.pagination.exceptions import InvalidCursor
from listing_service.core.pagination.timestamps import ensure_utc

if TYPE_CHECKING:
    from datetime import datetime

    from sqlalchemy.orm import InstrumentedAttribute

    from listing_service.core.pagination.cursor import CursorPayload, Identifier
    from listing_service.core.pagination.sorting import SortWhitelist


@dataclass(frozen=True, slots=True)
class Listing:
    """Identifier/timestamp accessors and sort whitelist for one collection.

    Attributes:
        name: Collection name (used in logs and error messages).
        id_column: Mapped identifier column.
        created_column: Mapped creation timestamp column.
        sorts: Fields clients may order by in offset mode.
        id_type: Identifier variant stored in ``id_column`` (int or UUID).
    """

    name: str
    id_column: InstrumentedAttribute[Any]
    created_column: InstrumentedAttribute[Any]
    sorts: SortWhitelist
    id_type: type[int] | type[UUID] = int

    def identifier_of(self, row: Any) -> Identifier:
        return getattr(row, self.id_column.key)

    def created_of(self, row: Any) -> datetime:
        return ensure_utc(getattr(row, self.created_column.key))

    def check_cursor(self, cursor: CursorPayload) -> None:
        """Reject a cursor whose identifier variant does not fit this collection.

        Raises:
            InvalidCursor: On an int cursor for UUID ids or vice versa.
        """
        if not isinstance(cursor.id, self.id_type):
            expected = "UUID" if self.id_type is UUID else "integer"
            raise InvalidCursor(
                str(cursor.id),
                f"{self.name} cursors must carry a {expected} identifier",
            )


__all__ = ["Listing"]
