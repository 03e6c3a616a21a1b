"""Service layer for the accounts feature."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select

from listing_service.core.exceptions import ConflictException
from listing_service.core.pagination import Listing, SortWhitelist
from listing_service.features.accounts.models import Account
from listing_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from listing_service.core.dependencies import Paging
    from listing_service.core.pagination import PageResult
    from listing_service.features.accounts.schemas import AccountCreate

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

ACCOUNT_LISTING = Listing(
    name="accounts",
    id_column=Account.id,
    created_column=Account.created_at,
    sorts=SortWhitelist(
        "accounts",
        {
            "id": Account.id,
            "created_at": Account.created_at,
            "updated_at": Account.updated_at,
            "username": Account.username,
            "display_name": Account.display_name,
            "email": Account.email,
        },
    ),
    id_type=int,
)


class AccountService:
    """Listing and creation of accounts."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def list_statement(name: str | None = None) -> Select[Any]:
        """Unordered account query; ``name`` matches the display name."""
        stmt = select(Account)
        if name:
            stmt = stmt.where(
                func.lower(Account.display_name).contains(name.lower(), autoescape=True)
            )
        return stmt

    async def list_accounts(self, paging: Paging, *, name: str | None = None) -> PageResult[Any]:
        page = await paging.run(self._session, ACCOUNT_LISTING, self.list_statement(name))
        lazy_logger.debug(
            lambda: f"service.list_accounts(name={name!r}, mode={paging.mode}) -> {page.count} items",
        )
        return page

    async def create_account(self, payload: AccountCreate) -> Account:
        """Create an account.

        Raises:
            ConflictException: If the username is taken.
        """
        existing = await self._session.scalar(
            select(Account.id).where(Account.username == payload.username)
        )
        if existing is not None:
            raise ConflictException(
                detail=f"Account with username '{payload.username}' already exists",
                type="account-username-exists",
                extra={"username": payload.username},
            )

        account = Account(**payload.model_dump())
        self._session.add(account)
        await self._session.flush()

        logger.info(
            "Account created",
            extra={"account_id": account.id, "username": account.username},
        )
        return account
