"""Standalone utility commands."""

from __future__ import annotations

import json
from pathlib import Path

import click

from listing_service.cli.utils import info, success


@click.command(name="export-openapi")
@click.option(
    "--output",
    "-o",
    default="openapi.json",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file path",
)
def export_openapi(output: Path) -> None:
    """Export the OpenAPI schema to a JSON file."""
    from listing_service.app.main import create_app

    openapi_schema = create_app().openapi()
    output.write_text(json.dumps(openapi_schema, indent=2), encoding="utf-8")

    success(f"OpenAPI schema exported to: {output}")
    info(f"Title: {openapi_schema.get('info', {}).get('title')}")
    info(f"Endpoints: {len(openapi_schema.get('paths', {}))}")
