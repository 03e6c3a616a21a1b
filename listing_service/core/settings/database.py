"""Database connection settings.

Any SQLAlchemy async URL is accepted. The default is a local SQLite file
through aiosqlite so the service runs without external infrastructure.

Environment variables use DB_ prefix.
Example: DB_URL=sqlite+aiosqlite:///./listing.db, DB_ECHO=true
"""

from __future__ import annotations

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Async SQLAlchemy engine settings."""

    url: str = Field(
        default="sqlite+aiosqlite:///./listing.db",
        min_length=1,
        description="SQLAlchemy async database URL.",
    )
    echo: bool = Field(
        default=False,
        description="Log every SQL statement (development only).",
    )
    pool_pre_ping: bool = Field(
        default=True,
        description="Validate connections before handing them out.",
    )
    create_tables: bool = Field(
        default=True,
        description="Create missing tables on startup.",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_sqlite(self) -> bool:
        """Whether the URL targets SQLite."""
        return self.url.startswith("sqlite")

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
