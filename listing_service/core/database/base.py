"""Declarative base and column mixins for listable models.

Every listable model needs a comparable identifier and a creation timestamp;
the mixins below provide both with consistent types so the pagination engine
can treat all collections alike.

Examples:
    Integer identifiers:
    class Account(Base, IntegerPKMixin, TimestampMixin):
        __tablename__ = "accounts"
        username: Mapped[str] = mapped_column(String(64), unique=True)

    UUID identifiers, creation time only:
    class Group(Base, UUIDPKMixin, CreatedAtMixin):
        __tablename__ = "groups"
        name: Mapped[str] = mapped_column(String(200))
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

# Consistent naming convention for database constraints
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative base with constraint naming and default table names.

    The table name defaults to the lowercase class name; listable models set
    ``__tablename__`` explicitly.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()


# ============================================================================
# Primary Key Mixins
# ============================================================================


class IntegerPKMixin:
    """Auto-increment integer primary key.

    Identifiers grow monotonically, which is what keyset paging relies on.
    """

    __allow_unmapped__ = True

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing integer primary key",
    )


class UUIDPKMixin:
    """UUID v4 primary key (opaque string identifiers in the API)."""

    __allow_unmapped__ = True

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
        comment="UUID v4 primary key",
    )


# ============================================================================
# Timestamp Mixins
# ============================================================================


class CreatedAtMixin:
    """Indexed creation timestamp, the primary key of snapshot ordering."""

    __allow_unmapped__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
        comment="Timestamp of record creation",
    )


class TimestampMixin(CreatedAtMixin):
    """Creation and last-modification timestamps (timezone-aware, UTC)."""

    __allow_unmapped__ = True

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
        comment="Timestamp of last update",
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
