"""Request-scoped values exposed as dependencies."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request


def get_request_id(request: Request) -> str | None:
    """Request ID assigned by RequestIDMiddleware, if it ran."""
    return getattr(request.state, "request_id", None)


RequestIdDep = Annotated[str | None, Depends(get_request_id)]
