"""Core database package: declarative base and column mixins."""

from listing_service.core.database.base import (
    NAMING_CONVENTION,
    Base,
    CreatedAtMixin,
    IntegerPKMixin,
    TimestampMixin,
    UUIDPKMixin,
    utcnow,
)

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "CreatedAtMixin",
    "IntegerPKMixin",
    "TimestampMixin",
    "UUIDPKMixin",
    "utcnow",
]
