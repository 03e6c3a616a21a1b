"""Accounts feature: user accounts listed by integer identifier."""

from __future__ import annotations

from .models import Account
from .router import router
from .schemas import AccountCreate, AccountResponse
from .service import ACCOUNT_LISTING, AccountService

__all__ = [
    "ACCOUNT_LISTING",
    "Account",
    "AccountCreate",
    "AccountResponse",
    "AccountService",
    "router",
]
