"""RFC 7807 Problem Details schemas for error responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    See: https://datatracker.ietf.org/doc/html/rfc7807

    Example:
        return JSONResponse(
            status_code=400,
            content=ProblemDetails(
                type="invalid-cursor",
                title="Bad Request",
                status=400,
                detail="invalid cursor: '%%%'",
                instance="/api/v1/accounts?cursor=%25%25%25",
            ).model_dump(exclude_none=True),
        )
    """

    type: str = Field(
        default="about:blank",
        min_length=1,
        max_length=200,
        description="URI reference identifying the problem type",
    )
    title: str = Field(
        min_length=1, max_length=200, description="Short, human-readable summary of the problem"
    )
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(
        default=None,
        max_length=2000,
        description="Human-readable explanation specific to this occurrence",
    )
    instance: str | None = Field(
        default=None,
        description="URI reference identifying the specific occurrence",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "invalid-sort-field",
                "title": "Bad Request",
                "status": 400,
                "detail": "invalid sort field 'password' for accounts",
                "instance": "/api/v1/accounts?sort=password",
                "code": "E_INVALID_PARAM",
                "parameter": "sort",
                "value": "password",
            }
        },
        extra="allow",
    )


class FieldError(BaseModel):
    """One field-level validation failure."""

    field: str = Field(description="Dotted location of the invalid field")
    message: str = Field(description="What is wrong with the value")
    type: str = Field(description="Validation error type")
    value: Any | None = Field(default=None, description="The rejected input")


class ValidationProblemDetails(ProblemDetails):
    """Problem details carrying field-level validation errors."""

    errors: list[FieldError] = Field(default_factory=list)


__all__ = [
    "FieldError",
    "ProblemDetails",
    "ValidationProblemDetails",
]
