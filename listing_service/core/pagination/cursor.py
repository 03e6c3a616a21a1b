"""Cursor encoding and decoding for pagination.

Cursors are opaque strings that encode a position in an ordered collection:
the identifier of the last row served and its creation timestamp. Snapshot
walks additionally carry the fixed "as of" instant so a client can continue
with nothing but the returned cursor.

Two families of cursor are accepted:

1. Bare identifiers (legacy): ``42`` or ``550e8400-e29b-41d4-a716-446655440000``.
   They carry no timestamp.
2. Encoded payloads: URL-safe base64 (padding stripped) over bytes whose first
   byte is a format tag:

   - ``0x02`` current revision, compact JSON::

         {"id": 42, "ts": 1736937000123456, "snap": 1736937600000000}

     with timestamps as integer microseconds since the epoch.
   - ``0x01`` compact binary ``uvarint(id) uvarint(unix_nanos)``, integer ids only.
   - ``{`` untagged JSON ``{"id": "...", "ts": "2025-01-15T10:30:00Z"}``.

Example:
    cursor = CursorCodec.encode(42, created_at)
    payload = CursorCodec.decode(cursor)
    assert payload.id == 42
"""

from __future__ import annotations

import base64
import binascii
import json
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from listing_service.core.pagination.exceptions import InvalidCursor
from listing_service.core.pagination.timestamps import (
    ensure_utc,
    from_epoch_micros,
    parse_timestamp,
    to_epoch_micros,
)

# Comparable identifier: integer (legacy numeric ids) or UUID (opaque string ids).
Identifier = int | UUID

FORMAT_BINARY = 0x01
FORMAT_JSON = 0x02
_UNTAGGED_JSON = ord("{")

# Integer identifiers live in signed 64-bit columns.
MAX_INT_ID = 2**63 - 1
_MAX_INT_DIGITS = len(str(MAX_INT_ID))

_DIGITS = re.compile(r"[0-9]+")
_CANONICAL_UUID = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
_BASE64URL = re.compile(r"[A-Za-z0-9_-]+={0,2}")


@dataclass(frozen=True, slots=True)
class CursorPayload:
    """Decoded cursor position.

    Attributes:
        id: Identifier of the boundary row.
        timestamp: Creation time of the boundary row (None for bare identifiers).
        snapshot: Fixed "as of" instant for snapshot walks.
    """

    id: Identifier
    timestamp: datetime | None = None
    snapshot: datetime | None = None

    def with_timestamp(self, timestamp: datetime) -> CursorPayload:
        """Return a copy carrying the given boundary timestamp."""
        return CursorPayload(id=self.id, timestamp=ensure_utc(timestamp), snapshot=self.snapshot)


def parse_identifier(raw: str) -> Identifier | None:
    """Interpret a bare identifier string.

    Returns:
        int for decimal digits, UUID for the canonical dashed form, else None.

    Raises:
        ValueError: Decimal digits outside the integer identifier range.
    """
    if _DIGITS.fullmatch(raw):
        if len(raw.lstrip("0")) > _MAX_INT_DIGITS:
            msg = "integer identifier out of range"
            raise ValueError(msg)
        return _check_int_id(int(raw))
    if _CANONICAL_UUID.fullmatch(raw):
        return UUID(raw)
    return None


def _check_int_id(value: int) -> int:
    if not 0 <= value <= MAX_INT_ID:
        msg = f"integer identifier out of range: {value}"
        raise ValueError(msg)
    return value


def identifier_to_str(value: Identifier) -> str:
    """String form of an identifier as exposed in page metadata."""
    return str(value)


class CursorCodec:
    """Encode and decode pagination cursors.

    Usage:
        # Encoding
        cursor = CursorCodec.encode(row.id, row.created_at)

        # Decoding (bare identifiers are accepted too)
        payload = CursorCodec.decode(cursor)
        print(payload.id, payload.timestamp)
    """

    @staticmethod
    def encode(
        id: Identifier,  # noqa: A002
        timestamp: datetime,
        *,
        snapshot: datetime | None = None,
    ) -> str:
        """Encode a position to an opaque string using the current revision.

        Args:
            id: Identifier of the boundary row.
            timestamp: Creation time of the boundary row.
            snapshot: Optional snapshot instant to embed.

        Returns:
            URL-safe base64 string without padding.

        Raises:
            ValueError: Integer identifier outside [0, MAX_INT_ID].
            TypeError: Identifier of an unsupported type.
        """
        body: dict[str, Any] = {
            "id": CursorCodec._serialize_id(id),
            "ts": to_epoch_micros(timestamp),
        }
        if snapshot is not None:
            body["snap"] = to_epoch_micros(snapshot)
        raw = bytes([FORMAT_JSON]) + json.dumps(body, separators=(",", ":")).encode()
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")

    @staticmethod
    def decode(cursor: str) -> CursorPayload:
        """Decode a cursor string.

        The bare identifier form is tried first, then the encoded payload.

        Args:
            cursor: Raw cursor from the client.

        Returns:
            CursorPayload with UTC-normalized timestamps.

        Raises:
            InvalidCursor: If neither form matches.
        """
        text = cursor.strip()
        try:
            identifier = parse_identifier(text)
        except ValueError as e:
            raise InvalidCursor(cursor, f"invalid cursor: {e}") from e
        if identifier is not None:
            return CursorPayload(id=identifier)
        return CursorCodec.decode_payload(text)

    @staticmethod
    def decode_payload(cursor: str) -> CursorPayload:
        """Decode an encoded (non-bare) cursor.

        Raises:
            InvalidCursor: On an unknown tag or a corrupt body.
        """
        if not _BASE64URL.fullmatch(cursor):
            raise InvalidCursor(cursor, "invalid cursor encoding")
        stripped = cursor.rstrip("=")
        try:
            raw = base64.urlsafe_b64decode(stripped + "=" * (-len(stripped) % 4))
        except (binascii.Error, ValueError) as e:
            raise InvalidCursor(cursor, "invalid cursor encoding") from e
        if not raw:
            raise InvalidCursor(cursor)

        tag = raw[0]
        try:
            if tag == FORMAT_JSON:
                return CursorCodec._decode_json(raw[1:])
            if tag == FORMAT_BINARY:
                return CursorCodec._decode_binary(raw[1:])
            if tag == _UNTAGGED_JSON:
                return CursorCodec._decode_untagged(raw)
        except (ValueError, TypeError, KeyError, OverflowError) as e:
            raise InvalidCursor(cursor, f"invalid cursor: {e}") from e
        raise InvalidCursor(cursor, f"unsupported cursor format 0x{tag:02x}")

    @staticmethod
    def _serialize_id(value: Identifier) -> int | str:
        if isinstance(value, bool):
            msg = "boolean is not an identifier"
            raise TypeError(msg)
        if isinstance(value, int):
            return _check_int_id(value)
        if isinstance(value, UUID):
            return str(value)
        msg = f"unsupported identifier type: {type(value).__name__}"
        raise TypeError(msg)

    @staticmethod
    def _deserialize_id(value: Any) -> Identifier:
        if isinstance(value, bool):
            msg = "boolean is not an identifier"
            raise TypeError(msg)
        if isinstance(value, int):
            return _check_int_id(value)
        if isinstance(value, str):
            identifier = parse_identifier(value)
            if identifier is not None:
                return identifier
        msg = f"unrecognized identifier: {value!r}"
        raise ValueError(msg)

    @staticmethod
    def _micros(value: Any) -> datetime:
        if isinstance(value, bool) or not isinstance(value, int):
            msg = f"timestamp must be an integer, got {value!r}"
            raise TypeError(msg)
        return from_epoch_micros(value)

    @staticmethod
    def _decode_json(body: bytes) -> CursorPayload:
        payload = json.loads(body.decode("utf-8"))
        if not isinstance(payload, dict):
            msg = "payload is not an object"
            raise TypeError(msg)
        snapshot = payload.get("snap")
        return CursorPayload(
            id=CursorCodec._deserialize_id(payload["id"]),
            timestamp=CursorCodec._micros(payload["ts"]),
            snapshot=CursorCodec._micros(snapshot) if snapshot is not None else None,
        )

    @staticmethod
    def _decode_binary(body: bytes) -> CursorPayload:
        identifier, offset = _read_uvarint(body, 0)
        nanos, offset = _read_uvarint(body, offset)
        if offset != len(body):
            msg = "trailing bytes after binary cursor"
            raise ValueError(msg)
        return CursorPayload(
            id=_check_int_id(identifier), timestamp=from_epoch_micros(nanos // 1000)
        )

    @staticmethod
    def _decode_untagged(raw: bytes) -> CursorPayload:
        payload = json.loads(raw.decode("utf-8"))
        if not isinstance(payload, dict):
            msg = "payload is not an object"
            raise TypeError(msg)
        ts = payload.get("ts")
        if not isinstance(ts, str):
            msg = "ts must be an RFC 3339 string"
            raise TypeError(msg)
        return CursorPayload(
            id=CursorCodec._deserialize_id(payload["id"]),
            timestamp=parse_timestamp(ts),
        )


def _read_uvarint(data: bytes, offset: int) -> tuple[int, int]:
    """Read an unsigned LEB128 varint (at most 10 bytes)."""
    result = 0
    shift = 0
    for index in range(offset, min(len(data), offset + 10)):
        byte = data[index]
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result, index + 1
        shift += 7
    msg = "truncated or overlong varint"
    raise ValueError(msg)


def encode_cursor(
    id: Identifier,  # noqa: A002
    timestamp: datetime,
    *,
    snapshot: datetime | None = None,
) -> str:
    """Module-level shortcut for :meth:`CursorCodec.encode`."""
    return CursorCodec.encode(id, timestamp, snapshot=snapshot)


def decode_cursor(cursor: str) -> CursorPayload:
    """Module-level shortcut for :meth:`CursorCodec.decode`."""
    return CursorCodec.decode(cursor)


__all__ = [
    "FORMAT_BINARY",
    "FORMAT_JSON",
    "MAX_INT_ID",
    "CursorCodec",
    "CursorPayload",
    "Identifier",
    "decode_cursor",
    "encode_cursor",
    "identifier_to_str",
    "parse_identifier",
]
