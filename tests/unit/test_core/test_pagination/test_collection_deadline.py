"""Tests for the session-backed collection and its request deadline."""

from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import select

from listing_service.core.pagination import (
    Deadline,
    QueryTimeoutException,
    SessionCollection,
    count_statement,
)
from listing_service.features.accounts.models import Account
from listing_service.features.accounts.service import AccountService


class SlowSession:
    """Minimal AsyncSession stand-in whose queries take ``delay`` seconds."""

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self.calls = 0

    async def scalars(self, statement):
        self.calls += 1
        await asyncio.sleep(self.delay)
        raise AssertionError("query should have been cancelled")

    async def scalar(self, statement):
        self.calls += 1
        await asyncio.sleep(self.delay)
        return 0


class TestDeadline:
    """Tests for Deadline arithmetic on the loop clock."""

    async def test_fresh_deadline(self):
        deadline = Deadline.after(5.0)

        assert deadline.timeout == 5.0
        assert 0 < deadline.remaining() <= 5.0
        assert deadline.expired is False

    async def test_past_deadline(self):
        deadline = Deadline(expires_at=asyncio.get_running_loop().time() - 1, timeout=0.5)

        assert deadline.expired is True


class TestSessionCollection:
    """Tests for SessionCollection."""

    async def test_fetch_and_count(self, db_session, make_accounts):
        await make_accounts(4)
        collection = SessionCollection(db_session, Deadline.after(5.0))
        stmt = select(Account).order_by(Account.id).limit(2)

        rows = await collection.fetch(stmt)
        total = await collection.count(stmt)

        assert [row.id for row in rows] == [1, 2]
        assert total == 4

    async def test_count_of_empty_filter(self, db_session, make_accounts):
        await make_accounts(2)

        total = await SessionCollection(db_session).count(AccountService.list_statement("nobody"))

        assert total == 0

    async def test_expired_deadline_skips_query(self):
        """No query is issued once the request budget is spent."""
        session = SlowSession(delay=0)
        deadline = Deadline(expires_at=asyncio.get_running_loop().time() - 1, timeout=0.25)

        with pytest.raises(QueryTimeoutException) as exc_info:
            await SessionCollection(session, deadline).fetch(select(Account))

        assert session.calls == 0
        assert exc_info.value.status_code == 504
        assert exc_info.value.extra == {"timeout": 0.25}

    async def test_slow_query_is_cancelled(self):
        session = SlowSession(delay=5)

        with pytest.raises(QueryTimeoutException):
            await SessionCollection(session, Deadline.after(0.05)).fetch(select(Account))

        assert session.calls == 1

    async def test_slow_count_is_cancelled(self):
        session = SlowSession(delay=5)

        with pytest.raises(QueryTimeoutException):
            await SessionCollection(session, Deadline.after(0.05)).count(select(Account))


def test_count_statement_strips_paging():
    stmt = select(Account).where(Account.is_active.is_(True)).order_by(Account.id).offset(10).limit(5)

    sql = str(count_statement(stmt))

    assert sql.lower().startswith("select count(*)")
    assert "ORDER BY" not in sql
    assert "LIMIT" not in sql
    assert "OFFSET" not in sql
    assert "WHERE accounts.is_active" in sql
