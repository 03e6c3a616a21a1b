"""Database management commands.

Example:bash
    # Verify connectivity and create missing tables
    listing-service db init

    # Fill the tables with demo rows for trying out paging
    listing-service db seed --accounts 250 --groups 40
"""

from __future__ import annotations

from datetime import timedelta
import sys
from typing import TYPE_CHECKING

import click
from sqlalchemy.exc import SQLAlchemyError

from listing_service.cli.utils import coro, error, info, success
from listing_service.core.database import utcnow
from listing_service.features.accounts.models import Account
from listing_service.features.configs.models import ConfigItem
from listing_service.features.groups.models import Group
from listing_service.features.projects.models import Project

if TYPE_CHECKING:
    from datetime import datetime

    from sqlalchemy.ext.asyncio import AsyncSession


def build_demo_rows(
    *, accounts: int, groups: int, now: datetime
) -> list[Account | ConfigItem | Group | Project]:
    """Demo rows, one second apart and ending at ``now``.

    Accounts also get a config and a project each ten rows, so every
    collection has something to page through.
    """
    rows: list[Account | ConfigItem | Group | Project] = []
    for index in range(accounts):
        created = now - timedelta(seconds=accounts - index)
        rows.append(
            Account(
                username=f"demo{index:05d}",
                display_name=f"Demo User {index:05d}",
                email=f"demo{index:05d}@example.com",
                created_at=created,
                updated_at=created,
            )
        )
        if index % 10 == 0:
            rows.append(
                ConfigItem(
                    name=f"demo-config-{index:05d}",
                    data={"index": index},
                    created_at=created,
                    updated_at=created,
                )
            )
            rows.append(
                Project(
                    name=f"Demo Project {index:05d}",
                    url=f"https://example.com/projects/{index:05d}",
                    created_at=created,
                    updated_at=created,
                )
            )
    rows.extend(
        Group(
            name=f"demo-group-{index:03d}" if index % 4 else None,
            created_at=now - timedelta(seconds=groups - index),
        )
        for index in range(groups)
    )
    return rows


async def seed_demo_data(session: AsyncSession, *, accounts: int, groups: int) -> int:
    """Insert demo rows and commit.

    Returns:
        Number of rows inserted.
    """
    rows = build_demo_rows(accounts=accounts, groups=groups, now=utcnow())
    session.add_all(rows)
    await session.commit()
    return len(rows)


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@click.option(
    "--create-tables/--no-create-tables",
    default=True,
    help="Create missing tables after connecting",
)
@coro
async def init(create_tables: bool) -> None:
    """Verify database connectivity and create missing tables."""
    from listing_service.infra.database import close_database, init_database

    info("Initializing database...")
    try:
        await init_database(create_tables=create_tables)
    except (OSError, SQLAlchemyError) as e:
        error(f"Database initialization failed: {e}")
        sys.exit(1)
    finally:
        await close_database()
    success("Database ready")


@db.command()
@click.option("--accounts", default=100, type=click.IntRange(0, 100_000), help="Accounts to create")
@click.option("--groups", default=20, type=click.IntRange(0, 100_000), help="Groups to create")
@coro
async def seed(accounts: int, groups: int) -> None:
    """Insert demo rows into every collection."""
    from listing_service.infra.database import close_database, get_async_session, init_database

    try:
        await init_database(create_tables=True)
        async with get_async_session() as session:
            inserted = await seed_demo_data(session, accounts=accounts, groups=groups)
    except (OSError, SQLAlchemyError) as e:
        error(f"Seeding failed: {e}")
        sys.exit(1)
    finally:
        await close_database()
    success(f"Inserted {inserted} rows")
