"""Pydantic schemas for the projects feature."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from listing_service.core.schemas.common import UTCDateTime


class ProjectBase(BaseModel):
    """Shared attributes for project payloads."""

    name: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=255, description="Project home URL")
    description: str | None = Field(default=None, max_length=1000)

    @field_validator("name", "url")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Trim surrounding whitespace and reject blank values."""
        v = v.strip()
        if not v:
            msg = "must not be blank"
            raise ValueError(msg)
        return v


class ProjectCreate(ProjectBase):
    """Payload used when creating a project."""


class ProjectResponse(ProjectBase):
    """Representation returned from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: UTCDateTime
    updated_at: UTCDateTime
