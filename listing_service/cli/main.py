"""Main CLI entry point for listing-service management commands."""

from __future__ import annotations

import click

from listing_service.cli.commands import database, server, utils
from listing_service.infra.logging.config import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="listing-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Listing Service CLI - management commands for the paginated list API.

    \b
    Command Groups:
      db         Database setup and demo data
      server     Development and production servers

    \b
    Quick Start:
      listing-service db init               # Connect and create tables
      listing-service db seed --accounts 250
      listing-service server dev            # Serve on APP_HOST:APP_PORT
      listing-service export-openapi -o openapi.json
    """
    ctx.ensure_object(dict)


cli.add_command(database.db)
cli.add_command(server.server)
cli.add_command(utils.export_openapi)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
