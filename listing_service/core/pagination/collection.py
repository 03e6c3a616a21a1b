"""Ordered collection capability and request deadlines.

Strategies never talk to a database directly. They shape a SQLAlchemy
``Select`` and hand it to an :class:`OrderedCollection`, which runs it and
returns rows. :class:`SessionCollection` is the ``AsyncSession``-backed
implementation; every query it issues is bounded by the request's
:class:`Deadline`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

from sqlalchemy import func, select

from listing_service.core.pagination.exceptions import QueryTimeoutException
from listing_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

T = TypeVar("T")


class OrderedCollection(Protocol):
    """Anything that can run a shaped page query and a count query."""

    async def fetch(self, statement: Select[Any]) -> Sequence[Any]: ...

    async def count(self, statement: Select[Any]) -> int: ...


@dataclass(frozen=True, slots=True)
class Deadline:
    """Absolute expiry on the event loop clock.

    Attributes:
        expires_at: ``loop.time()`` value after which queries are abandoned.
        timeout: The budget the deadline was created with, in seconds.
    """

    expires_at: float
    timeout: float

    @classmethod
    def after(cls, seconds: float) -> Deadline:
        """Deadline ``seconds`` from now. Must be called inside a running loop."""
        loop = asyncio.get_running_loop()
        return cls(expires_at=loop.time() + seconds, timeout=seconds)

    def remaining(self) -> float:
        return self.expires_at - asyncio.get_running_loop().time()

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0


def count_statement(statement: Select[Any]) -> Select[Any]:
    """Count rows matching ``statement`` with ordering, limit and offset stripped."""
    inner = statement.order_by(None).limit(None).offset(None)
    return select(func.count()).select_from(inner.subquery())


class SessionCollection:
    """OrderedCollection over an ``AsyncSession``.

    Args:
        session: Session used for every query.
        deadline: Optional request deadline applied to each query.
    """

    __slots__ = ("_session", "_deadline")

    def __init__(self, session: AsyncSession, deadline: Deadline | None = None) -> None:
        self._session = session
        self._deadline = deadline

    async def fetch(self, statement: Select[Any]) -> Sequence[Any]:
        lazy_logger.debug(lambda: f"collection.fetch: {statement}")
        result = await self._bounded(lambda: self._session.scalars(statement))
        return result.all()

    async def count(self, statement: Select[Any]) -> int:
        total = await self._bounded(lambda: self._session.scalar(count_statement(statement)))
        return int(total or 0)

    async def _bounded(self, run: Callable[[], Awaitable[T]]) -> T:
        if self._deadline is None:
            return await run()
        if self._deadline.expired:
            raise QueryTimeoutException(self._deadline.timeout)
        try:
            async with asyncio.timeout_at(self._deadline.expires_at):
                return await run()
        except TimeoutError as e:
            logger.warning(
                "Query exceeded request deadline",
                extra={"timeout": self._deadline.timeout},
            )
            raise QueryTimeoutException(self._deadline.timeout) from e


__all__ = [
    "Deadline",
    "OrderedCollection",
    "SessionCollection",
    "count_statement",
]
