"""Projects feature."""

from __future__ import annotations

from .models import Project
from .router import router
from .schemas import ProjectCreate, ProjectResponse
from .service import PROJECT_LISTING, ProjectService

__all__ = [
    "PROJECT_LISTING",
    "Project",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectService",
    "router",
]
