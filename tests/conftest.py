"""Pytest configuration and shared fixtures.

Organization:
    - Database Fixtures: in-memory SQLite engine and session
    - Application Fixtures: FastAPI app bound to the test session, HTTP client
    - Data Fixtures: factories that insert rows with controlled timestamps
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import UTC, datetime, timedelta
import os
from typing import TYPE_CHECKING, Any

from httpx import ASGITransport, AsyncClient
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

# Keep the application off the on-disk default database
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DB_CREATE_TABLES", "false")
os.environ.setdefault("LOG_CONSOLE_ENABLED", "false")

from listing_service.core.database import Base  # noqa: E402
from listing_service.features.accounts.models import Account  # noqa: E402
import listing_service.features.configs.models  # noqa: E402, F401
from listing_service.features.groups.models import Group  # noqa: E402
import listing_service.features.projects.models  # noqa: E402, F401

BASE_TIME = datetime(2025, 1, 15, 10, 0, 0, tzinfo=UTC)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Async engine over a single shared in-memory SQLite connection.

    Yields:
        Async SQLAlchemy engine with all tables created.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session bound to the test engine.

    Example:
        async def test_create_account(db_session):
            db_session.add(Account(username="alice", display_name="Alice"))
            await db_session.commit()
    """
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(db_session: AsyncSession) -> FastAPI:
    """FastAPI application whose requests share the test session."""
    from listing_service.app.main import create_app
    from listing_service.core.dependencies import get_db_session

    application = create_app()

    async def _override_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    application.dependency_overrides[get_db_session] = _override_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client talking to the app in-process.

    Example:
        async def test_health_check(client):
            response = await client.get("/api/v1/health")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
def base_time() -> datetime:
    """Fixed instant the data factories count from."""
    return BASE_TIME


@pytest.fixture
def make_accounts(
    db_session: AsyncSession,
) -> Callable[..., Awaitable[list[Account]]]:
    """Insert ``n`` accounts, one second apart starting at ``start``.

    Example:
        accounts = await make_accounts(10)
        assert [a.id for a in accounts] == list(range(1, 11))
    """

    async def _make(
        n: int,
        *,
        start: datetime = BASE_TIME,
        step: timedelta = timedelta(seconds=1),
        **overrides: Any,
    ) -> list[Account]:
        accounts = []
        for index in range(n):
            fields = {
                "username": f"user{index:03d}",
                "display_name": f"User {index:03d}",
                "email": f"user{index:03d}@example.com",
                "created_at": start + step * index,
                "updated_at": start + step * index,
            }
            fields.update(overrides)
            accounts.append(Account(**fields))
        db_session.add_all(accounts)
        await db_session.flush()
        await db_session.commit()
        return accounts

    return _make


@pytest.fixture
def make_groups(db_session: AsyncSession) -> Callable[..., Awaitable[list[Group]]]:
    """Insert groups with the given creation times (and optional names)."""

    async def _make(created: list[datetime], names: list[str | None] | None = None) -> list[Group]:
        names = names or [f"group-{index}" for index in range(len(created))]
        groups = [
            Group(name=name, created_at=created_at)
            for name, created_at in zip(names, created, strict=True)
        ]
        db_session.add_all(groups)
        await db_session.commit()
        return groups

    return _make

