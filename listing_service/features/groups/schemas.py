"""Pydantic schemas for the groups feature."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from listing_service.core.schemas.common import UTCDateTime


class GroupCreate(BaseModel):
    """Payload used when creating a group."""

    name: str | None = Field(default=None, max_length=255, description="Optional group name")


class GroupResponse(GroupCreate):
    """Representation returned from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: UTCDateTime
