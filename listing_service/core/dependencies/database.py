"""Database dependency for FastAPI route handlers.

``get_db_session()`` ties a session to the HTTP request; code outside FastAPI
(scripts, startup hooks) uses ``infra.database.get_async_session()`` directly.
Both draw from the same session factory.

Usage:
    @router.get("/accounts")
    async def list_accounts(session: Annotated[AsyncSession, Depends(get_db_session)]):
        ...
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from listing_service.infra.database import get_async_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for database session.

    Yields:
        Database session that is automatically closed after request.
    """
    async with get_async_session() as session:
        yield session
