"""SQLAlchemy models for the configs feature."""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from listing_service.core.database import Base, TimestampMixin, UUIDPKMixin


class ConfigItem(Base, UUIDPKMixin, TimestampMixin):
    """Named configuration document with an arbitrary JSON body."""

    __tablename__ = "config_items"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    def __repr__(self) -> str:
        return f"<ConfigItem(id={self.id}, name={self.name!r})>"
