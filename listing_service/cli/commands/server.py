"""Server management commands."""

from __future__ import annotations

import subprocess
import sys

import click

from listing_service.cli.utils import error, info, success, warning
from listing_service.core.settings import get_app_settings

APP_PATH = "listing_service.app.main:app"


def _uvicorn_command(host: str, port: int, log_level: str) -> list[str]:
    return [
        "uvicorn",
        APP_PATH,
        "--host",
        host,
        "--port",
        str(port),
        "--log-level",
        log_level,
    ]


def _run(cmd: list[str]) -> None:
    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        info("Shutting down server...")
    except (OSError, subprocess.CalledProcessError) as e:
        error(f"Failed to start server: {e}")
        sys.exit(1)


@click.group(name="server")
def server() -> None:
    """Server management commands."""


@server.command()
@click.option("--host", default=None, help="Host to bind (default: APP_HOST)")
@click.option("--port", default=None, type=int, help="Port to bind (default: APP_PORT)")
@click.option(
    "--reload/--no-reload",
    default=True,
    help="Enable auto-reload on code changes",
)
@click.option(
    "--workers",
    default=1,
    type=int,
    help="Number of worker processes (disable with --reload)",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["critical", "error", "warning", "info", "debug", "trace"]),
    help="Uvicorn log level",
)
def dev(host: str | None, port: int | None, reload: bool, workers: int, log_level: str) -> None:
    """Run development server with auto-reload."""
    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    if reload and workers > 1:
        warning("--reload is incompatible with --workers > 1. Setting workers to 1.")
        workers = 1

    info(f"Server will run at: http://{host}:{port}{settings.api_prefix}")
    info(f"Environment: {settings.environment}")

    cmd = _uvicorn_command(host, port, log_level)
    if reload:
        cmd.append("--reload")
    else:
        cmd.extend(["--workers", str(workers)])

    success("Starting uvicorn...")
    _run(cmd)


@server.command()
@click.option("--host", default=None, help="Host to bind (default: APP_HOST)")
@click.option("--port", default=None, type=int, help="Port to bind (default: APP_PORT)")
@click.option("--workers", default=4, type=int, help="Number of worker processes")
@click.option("--access-log/--no-access-log", default=True, help="Enable access logging")
def prod(host: str | None, port: int | None, workers: int, access_log: bool) -> None:
    """Run production server (no auto-reload, multiple workers)."""
    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    info(f"Server will run at: http://{host}:{port}{settings.api_prefix}")
    info(f"Workers: {workers}")

    cmd = [*_uvicorn_command(host, port, "info"), "--workers", str(workers)]
    if not access_log:
        cmd.append("--no-access-log")

    success("Starting uvicorn in production mode...")
    _run(cmd)
