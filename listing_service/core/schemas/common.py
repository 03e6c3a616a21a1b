"""Common schemas and validators."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import AfterValidator

from listing_service.core.pagination.timestamps import ensure_utc

# Datetimes read back from stores without zone support come out naive; they are UTC.
UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]


class HealthStatus(str, Enum):
    """Health check status values."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
