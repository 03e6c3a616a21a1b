"""SQLAlchemy models for the groups feature."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from listing_service.core.database import Base, CreatedAtMixin, UUIDPKMixin


class Group(Base, UUIDPKMixin, CreatedAtMixin):
    """Sharing group. Groups are never edited, so they carry no ``updated_at``."""

    __tablename__ = "groups"

    name: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name={self.name!r})>"
