"""Database engine and session management (SQLAlchemy async)."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from listing_service.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

db_settings = get_db_settings()
app_settings = get_app_settings()

SLOW_QUERY_SECONDS = 1.0

engine = create_async_engine(
    db_settings.url,
    pool_pre_ping=db_settings.pool_pre_ping,
    echo=db_settings.echo or app_settings.debug,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@event.listens_for(engine.sync_engine, "before_cursor_execute")
def _before_cursor_execute(
    conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: Any
) -> None:
    """Record query start time before execution."""
    _ = conn, cursor, statement, parameters, executemany
    context._query_start_time = time.perf_counter()


@event.listens_for(engine.sync_engine, "after_cursor_execute")
def _after_cursor_execute(
    conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: Any
) -> None:
    """Log slow queries with the active trace id."""
    _ = conn, cursor, parameters, executemany
    duration = time.perf_counter() - context._query_start_time
    if duration < SLOW_QUERY_SECONDS:
        return

    span = trace.get_current_span()
    trace_id = None
    if span and span.get_span_context().is_valid:
        trace_id = format(span.get_span_context().trace_id, "032x")
    logger.warning(
        "Slow query",
        extra={
            "duration_ms": round(duration * 1000, 1),
            "statement": statement.split(None, 1)[0].upper() if statement else "UNKNOWN",
            "trace_id": trace_id,
        },
    )


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            result = await session.scalars(select(Account))
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_database(*, create_tables: bool | None = None) -> None:
    """Verify connectivity and optionally create missing tables.

    Args:
        create_tables: Override for ``DB_CREATE_TABLES``.

    Raises:
        Exception: Whatever the driver raises when the database is unreachable.
    """
    from listing_service.core.database import Base

    should_create = db_settings.create_tables if create_tables is None else create_tables
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if should_create:
                await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        logger.error(
            "Failed to initialize database",
            extra={"url": engine.url.render_as_string(hide_password=True), "error": str(e)},
        )
        raise
    logger.info(
        "Database connection established",
        extra={
            "url": engine.url.render_as_string(hide_password=True),
            "tables": sorted(Base.metadata.tables) if should_create else [],
        },
    )


async def close_database() -> None:
    """Dispose of the engine's connection pool on shutdown."""
    logger.info("Closing database connection")
    await engine.dispose()


__all__ = [
    "AsyncSessionLocal",
    "close_database",
    "engine",
    "get_async_session",
    "init_database",
]
