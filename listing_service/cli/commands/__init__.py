"""CLI command modules."""

from listing_service.cli.commands import database, server, utils

__all__ = [
    "database",
    "server",
    "utils",
]
