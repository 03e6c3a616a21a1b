"""Pagination settings for list endpoints.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_LIMIT=50, PAGINATION_QUERY_TIMEOUT=1.5

The pagination engine never reads these directly; the HTTP dependency turns
them into a PagingConfig and a per-request Deadline.
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from listing_service.core.pagination.params import PagingConfig


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_limit: Page size when ``limit`` is omitted.
        min_limit: Lower clamp bound for ``limit``.
        max_limit: Upper clamp bound for ``limit``.
        query_timeout: Seconds each list request may spend querying.
    """

    default_limit: int = Field(
        default=20,
        ge=1,
        le=1000,
        description="Default page size when limit not specified",
    )
    min_limit: int = Field(
        default=1,
        ge=1,
        le=1000,
        description="Smallest page size a request can clamp to",
    )
    max_limit: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Maximum allowed page size (hard limit)",
    )
    query_timeout: float = Field(
        default=3.0,
        gt=0,
        le=300,
        description="Per-request query deadline in seconds",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> PaginationSettings:
        if not self.min_limit <= self.default_limit <= self.max_limit:
            msg = "default_limit must lie within [min_limit, max_limit]"
            raise ValueError(msg)
        return self

    def to_config(self) -> PagingConfig:
        """Parser configuration derived from these settings."""
        return PagingConfig(
            default_limit=self.default_limit,
            min_limit=self.min_limit,
            max_limit=self.max_limit,
        )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
