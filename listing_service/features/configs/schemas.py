"""Pydantic schemas for the configs feature."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from listing_service.core.schemas.common import UTCDateTime


class ConfigItemBase(BaseModel):
    """Shared attributes for config payloads."""

    name: str = Field(..., min_length=1, max_length=255, description="Config name")
    data: dict[str, Any] = Field(default_factory=dict, description="Config document")


class ConfigItemCreate(ConfigItemBase):
    """Payload used when creating a config."""


class ConfigItemResponse(ConfigItemBase):
    """Representation returned from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: UTCDateTime
    updated_at: UTCDateTime
