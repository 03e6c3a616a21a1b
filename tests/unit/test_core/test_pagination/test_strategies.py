"""Strategy tests against real SQL (in-memory SQLite).

Accounts carry integer identifiers and groups carry UUIDs, so between them
both identifier variants are walked.
"""

from __future__ import annotations

from datetime import timedelta
import logging
from typing import Any
from uuid import uuid4

import pytest
from sqlalchemy import select

from listing_service.core.pagination import (
    CursorPayload,
    InvalidCursor,
    InvalidSortField,
    PageResult,
    PagingMode,
    SessionCollection,
    paginate,
    parse_paging,
    run_keyset,
    run_offset,
    run_snapshot,
)
from listing_service.features.accounts.models import Account
from listing_service.features.accounts.service import ACCOUNT_LISTING, AccountService
from listing_service.features.groups.models import Group
from listing_service.features.groups.service import GROUP_LISTING


class RecordingCollection:
    """OrderedCollection stand-in that records calls instead of querying."""

    def __init__(self, rows: list[Any] | None = None, count_error: Exception | None = None):
        self.rows = rows or []
        self.count_error = count_error
        self.fetched: list[Any] = []
        self.counted: list[Any] = []

    async def fetch(self, statement):
        self.fetched.append(statement)
        return self.rows

    async def count(self, statement):
        self.counted.append(statement)
        if self.count_error is not None:
            raise self.count_error
        return len(self.rows)


def _ids(page: PageResult[Any]) -> list[Any]:
    return [row.id for row in page.items]


# ──────────────────────────────────────────────────────────────
# Offset
# ──────────────────────────────────────────────────────────────


class TestOffsetStrategy:
    """Tests for run_offset."""

    async def test_default_order_is_newest_first(self, db_session, make_accounts):
        await make_accounts(7)
        collection = SessionCollection(db_session)

        page = await run_offset(
            collection, ACCOUNT_LISTING, select(Account), limit=3, offset=3, with_total=True
        )

        assert _ids(page) == [4, 3, 2]
        assert page.has_more is True
        assert page.next_marker == 6
        assert page.total == 7

    async def test_short_last_page(self, db_session, make_accounts):
        await make_accounts(7)

        page = await run_offset(
            SessionCollection(db_session), ACCOUNT_LISTING, select(Account), limit=3, offset=6
        )

        assert _ids(page) == [1]
        assert page.has_more is False
        assert page.next_marker == 7
        assert page.total is None

    async def test_offset_past_end(self, db_session, make_accounts):
        await make_accounts(3)

        page = await run_offset(
            SessionCollection(db_session), ACCOUNT_LISTING, select(Account), limit=5, offset=10
        )

        assert page.items == []
        assert page.has_more is False
        assert page.next_marker == 10

    async def test_total_respects_filters(self, db_session, make_accounts):
        """The total counts the filtered collection, not the whole table."""
        await make_accounts(12)
        stmt = AccountService.list_statement(name="user 00")

        page = await run_offset(
            SessionCollection(db_session), ACCOUNT_LISTING, stmt, limit=3, with_total=True
        )

        assert page.total == 10
        assert page.count == 3

    async def test_whitelisted_sort_with_tie_break(self, db_session, make_accounts):
        """Equal sort keys are ordered by identifier in the same direction."""
        await make_accounts(4, display_name="Same")

        asc = await run_offset(
            SessionCollection(db_session),
            ACCOUNT_LISTING,
            select(Account),
            limit=10,
            sort="display_name:asc",
        )
        desc = await run_offset(
            SessionCollection(db_session),
            ACCOUNT_LISTING,
            select(Account),
            limit=10,
            sort="display_name:desc",
        )

        assert _ids(asc) == [1, 2, 3, 4]
        assert _ids(desc) == [4, 3, 2, 1]

    async def test_sort_by_username(self, db_session, make_accounts):
        await make_accounts(3)

        page = await run_offset(
            SessionCollection(db_session),
            ACCOUNT_LISTING,
            select(Account),
            limit=10,
            sort="username:desc",
        )

        assert [a.username for a in page.items] == ["user002", "user001", "user000"]

    async def test_rejects_unlisted_sort(self, db_session):
        with pytest.raises(InvalidSortField):
            await run_offset(
                SessionCollection(db_session),
                ACCOUNT_LISTING,
                select(Account),
                limit=10,
                sort="password",
            )

    async def test_count_failure_propagates(self):
        collection = RecordingCollection(count_error=RuntimeError("count failed"))

        with pytest.raises(RuntimeError, match="count failed"):
            await run_offset(
                collection, ACCOUNT_LISTING, select(Account), limit=5, with_total=True
            )

    async def test_count_skipped_unless_requested(self):
        collection = RecordingCollection()

        await run_offset(collection, ACCOUNT_LISTING, select(Account), limit=5)

        assert collection.counted == []


# ──────────────────────────────────────────────────────────────
# Keyset
# ──────────────────────────────────────────────────────────────


class TestKeysetStrategy:
    """Tests for run_keyset."""

    async def test_walk_visits_every_row_once(self, db_session, make_accounts):
        """1..10 with limit 3 pages as [1,2,3] [4,5,6] [7,8,9] [10]."""
        await make_accounts(10)
        collection = SessionCollection(db_session)

        pages = []
        cursor = None
        while True:
            page = await run_keyset(
                collection, ACCOUNT_LISTING, select(Account), limit=3, cursor=cursor
            )
            pages.append(_ids(page))
            if not page.has_more:
                break
            cursor = page.next_marker

        assert pages == [[1, 2, 3], [4, 5, 6], [7, 8, 9], [10]]

    async def test_full_last_page_is_followed_by_empty_page(self, db_session, make_accounts):
        await make_accounts(6)
        collection = SessionCollection(db_session)

        second = await run_keyset(
            collection, ACCOUNT_LISTING, select(Account), limit=3, cursor=CursorPayload(id=3)
        )
        third = await run_keyset(
            collection, ACCOUNT_LISTING, select(Account), limit=3, cursor=second.next_marker
        )

        assert _ids(second) == [4, 5, 6]
        assert second.has_more is True
        assert third.items == []
        assert third.has_more is False
        assert third.next_marker is None

    async def test_marker_carries_last_row(self, db_session, make_accounts, base_time):
        await make_accounts(5)

        page = await run_keyset(
            SessionCollection(db_session), ACCOUNT_LISTING, select(Account), limit=2
        )

        assert page.next_marker == CursorPayload(id=2, timestamp=base_time + timedelta(seconds=1))

    async def test_filter_is_preserved(self, db_session, make_accounts):
        await make_accounts(12)
        stmt = AccountService.list_statement(name="user 01")

        page = await run_keyset(
            SessionCollection(db_session), ACCOUNT_LISTING, stmt, limit=5, cursor=CursorPayload(id=3)
        )

        assert _ids(page) == [11, 12]

    async def test_uuid_walk(self, db_session, make_groups, base_time):
        groups = await make_groups([base_time + timedelta(seconds=i) for i in range(5)])
        expected = sorted(g.id for g in groups)
        collection = SessionCollection(db_session)

        first = await run_keyset(collection, GROUP_LISTING, select(Group), limit=3)
        second = await run_keyset(
            collection, GROUP_LISTING, select(Group), limit=3, cursor=first.next_marker
        )

        assert _ids(first) + _ids(second) == expected
        assert second.has_more is False

    async def test_identifier_variant_mismatch(self):
        collection = RecordingCollection()

        with pytest.raises(InvalidCursor):
            await run_keyset(
                collection, ACCOUNT_LISTING, select(Account), limit=3, cursor=CursorPayload(id=uuid4())
            )
        with pytest.raises(InvalidCursor):
            await run_keyset(
                collection, GROUP_LISTING, select(Group), limit=3, cursor=CursorPayload(id=7)
            )
        assert collection.fetched == []


# ──────────────────────────────────────────────────────────────
# Snapshot
# ──────────────────────────────────────────────────────────────


class TestSnapshotStrategy:
    """Tests for run_snapshot."""

    async def test_inserts_after_snapshot_never_appear(self, db_session, make_groups, base_time):
        """Rows created after the snapshot stay out of every later page."""
        groups = await make_groups([base_time + timedelta(seconds=i) for i in range(5)])
        snapshot = base_time + timedelta(seconds=10)
        collection = SessionCollection(db_session)

        first = await run_snapshot(
            collection, GROUP_LISTING, select(Group), limit=2, snapshot=snapshot
        )
        db_session.add(Group(name="late", created_at=snapshot + timedelta(seconds=1)))
        await db_session.commit()

        seen = _ids(first)
        cursor = first.next_marker
        while cursor is not None:
            page = await run_snapshot(
                collection, GROUP_LISTING, select(Group), limit=2, snapshot=snapshot, cursor=cursor
            )
            seen.extend(_ids(page))
            cursor = page.next_marker if page.has_more else None

        assert seen == [g.id for g in reversed(groups)]

    async def test_marker_embeds_snapshot(self, db_session, make_groups, base_time):
        groups = await make_groups([base_time, base_time + timedelta(seconds=1)])
        snapshot = base_time + timedelta(minutes=1)

        page = await run_snapshot(
            SessionCollection(db_session), GROUP_LISTING, select(Group), limit=1, snapshot=snapshot
        )

        assert page.next_marker == CursorPayload(
            id=groups[1].id,
            timestamp=base_time + timedelta(seconds=1),
            snapshot=snapshot,
        )

    async def test_rows_at_snapshot_instant_are_included(self, db_session, make_groups, base_time):
        await make_groups([base_time, base_time + timedelta(seconds=1)])

        page = await run_snapshot(
            SessionCollection(db_session), GROUP_LISTING, select(Group), limit=5, snapshot=base_time
        )

        assert page.count == 1

    async def test_equal_timestamps_break_ties_by_identifier(
        self, db_session, make_accounts, base_time
    ):
        """Rows sharing created_at are walked by identifier, none skipped or repeated."""
        await make_accounts(5, step=timedelta(0))
        snapshot = base_time + timedelta(seconds=1)
        collection = SessionCollection(db_session)

        first = await run_snapshot(
            collection, ACCOUNT_LISTING, select(Account), limit=2, snapshot=snapshot
        )
        second = await run_snapshot(
            collection,
            ACCOUNT_LISTING,
            select(Account),
            limit=2,
            snapshot=snapshot,
            cursor=first.next_marker,
        )
        third = await run_snapshot(
            collection,
            ACCOUNT_LISTING,
            select(Account),
            limit=2,
            snapshot=snapshot,
            cursor=second.next_marker,
        )

        assert [_ids(first), _ids(second), _ids(third)] == [[5, 4], [3, 2], [1]]
        assert third.has_more is False

    async def test_cursor_beyond_snapshot_returns_empty_page(
        self, base_time, caplog: pytest.LogCaptureFixture
    ):
        """A cursor newer than the snapshot ends the walk without querying."""
        collection = RecordingCollection(rows=[object()])
        cursor = CursorPayload(id=5, timestamp=base_time + timedelta(hours=1))

        with caplog.at_level(logging.WARNING, logger="listing_service.core.pagination.strategies"):
            page = await run_snapshot(
                collection,
                ACCOUNT_LISTING,
                select(Account),
                limit=3,
                snapshot=base_time,
                cursor=cursor,
            )

        assert page.items == ()
        assert page.has_more is False
        assert page.next_marker is None
        assert collection.fetched == []
        assert any(r.getMessage() == "Snapshot cursor lies beyond its snapshot" for r in caplog.records)

    async def test_cursor_without_timestamp_continues_by_identifier(
        self, db_session, make_accounts, base_time
    ):
        await make_accounts(5)
        snapshot = base_time + timedelta(minutes=1)

        page = await run_snapshot(
            SessionCollection(db_session),
            ACCOUNT_LISTING,
            select(Account),
            limit=10,
            snapshot=snapshot,
            cursor=CursorPayload(id=3),
        )

        assert _ids(page) == [2, 1]

    async def test_naive_snapshot_is_utc(self, db_session, make_accounts, base_time):
        await make_accounts(3)
        naive = (base_time + timedelta(seconds=1)).replace(tzinfo=None)

        page = await run_snapshot(
            SessionCollection(db_session), ACCOUNT_LISTING, select(Account), limit=10, snapshot=naive
        )

        assert _ids(page) == [2, 1]


# ──────────────────────────────────────────────────────────────
# Dispatch
# ──────────────────────────────────────────────────────────────


class TestPaginate:
    """paginate routes a parsed request to its strategy."""

    async def test_keyset_request(self, db_session, make_accounts):
        await make_accounts(5)
        request, mode = parse_paging({"cursor": "2", "limit": "2"})

        page = await paginate(
            SessionCollection(db_session), ACCOUNT_LISTING, select(Account), request, mode
        )

        assert mode is PagingMode.KEYSET
        assert _ids(page) == [3, 4]

    async def test_snapshot_request(self, db_session, make_accounts, base_time):
        await make_accounts(5)
        request, mode = parse_paging({"fixed": "true", "limit": "2"}, now=base_time)

        page = await paginate(
            SessionCollection(db_session), ACCOUNT_LISTING, select(Account), request, mode
        )

        assert _ids(page) == [1]
        assert page.has_more is False

    async def test_offset_request(self, db_session, make_accounts):
        await make_accounts(5)
        request, mode = parse_paging({"offset": "1", "limit": "2", "with_total": "yes"})

        page = await paginate(
            SessionCollection(db_session), ACCOUNT_LISTING, select(Account), request, mode
        )

        assert _ids(page) == [4, 3]
        assert page.total == 5
        assert page.next_marker == 3
