"""SQLAlchemy models for the accounts feature."""

from __future__ import annotations

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from listing_service.core.database import Base, IntegerPKMixin, TimestampMixin


class Account(Base, IntegerPKMixin, TimestampMixin):
    """User account.

    Accounts keep integer identifiers, so keyset walks over them follow
    insertion order.
    """

    __tablename__ = "accounts"

    username: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
        comment="Unique login name",
    )
    display_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Human-readable name",
    )
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, username={self.username!r})>"
