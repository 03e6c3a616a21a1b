"""Pydantic schemas for the accounts feature."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from listing_service.core.schemas.common import UTCDateTime


class AccountBase(BaseModel):
    """Shared attributes for account payloads."""

    username: str = Field(
        ...,
        min_length=1,
        max_length=64,
        pattern=r"^[A-Za-z0-9_.-]+$",
        description="Unique login name",
    )
    display_name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    is_active: bool = True

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        """Usernames are case-insensitive; store them lowercase."""
        return v.lower()


class AccountCreate(AccountBase):
    """Payload used when creating an account."""


class AccountResponse(AccountBase):
    """Representation returned from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: UTCDateTime
    updated_at: UTCDateTime
