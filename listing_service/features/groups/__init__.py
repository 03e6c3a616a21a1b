"""Groups feature."""

from __future__ import annotations

from .models import Group
from .router import router
from .schemas import GroupCreate, GroupResponse
from .service import GROUP_LISTING, GroupService

__all__ = [
    "GROUP_LISTING",
    "Group",
    "GroupCreate",
    "GroupResponse",
    "GroupService",
    "router",
]
