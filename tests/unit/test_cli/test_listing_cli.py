"""Tests for the listing-service CLI.

Uses Click's CliRunner; server and database calls are patched so no
process is spawned and no file-backed database is touched.
"""

from __future__ import annotations

from datetime import UTC, datetime
import json
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner
import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from listing_service.cli.commands.database import build_demo_rows, seed_demo_data
from listing_service.cli.main import cli
from listing_service.features.accounts.models import Account
from listing_service.features.configs.models import ConfigItem
from listing_service.features.groups.models import Group
from listing_service.features.projects.models import Project


@pytest.fixture
def cli_runner():
    return CliRunner()


def test_help_lists_command_groups(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "db" in result.output
    assert "server" in result.output
    assert "export-openapi" in result.output


class TestServerCommands:
    """server dev/prod build the uvicorn command line."""

    def test_dev_without_reload(self, cli_runner):
        with patch("listing_service.cli.commands.server.subprocess.run") as run:
            result = cli_runner.invoke(
                cli, ["server", "dev", "--no-reload", "--port", "9000", "--workers", "2"]
            )

        assert result.exit_code == 0, result.output
        cmd = run.call_args.args[0]
        assert cmd[:2] == ["uvicorn", "listing_service.app.main:app"]
        assert cmd[cmd.index("--port") + 1] == "9000"
        assert cmd[-2:] == ["--workers", "2"]

    def test_dev_reload_forces_single_worker(self, cli_runner):
        with patch("listing_service.cli.commands.server.subprocess.run") as run:
            result = cli_runner.invoke(cli, ["server", "dev", "--workers", "3"])

        assert "incompatible" in result.output
        assert "--reload" in run.call_args.args[0]
        assert "--workers" not in run.call_args.args[0]

    def test_prod_without_access_log(self, cli_runner):
        with patch("listing_service.cli.commands.server.subprocess.run") as run:
            result = cli_runner.invoke(cli, ["server", "prod", "--no-access-log"])

        assert result.exit_code == 0, result.output
        cmd = run.call_args.args[0]
        assert "--no-access-log" in cmd
        assert cmd[cmd.index("--workers") + 1] == "4"

    def test_launch_failure_exits_nonzero(self, cli_runner):
        with patch(
            "listing_service.cli.commands.server.subprocess.run",
            side_effect=FileNotFoundError("uvicorn"),
        ):
            result = cli_runner.invoke(cli, ["server", "prod"])

        assert result.exit_code == 1


class TestDatabaseCommands:
    """db init delegates to the infra layer."""

    def test_init(self, cli_runner):
        with (
            patch("listing_service.infra.database.init_database", new_callable=AsyncMock) as init,
            patch("listing_service.infra.database.close_database", new_callable=AsyncMock) as close,
        ):
            result = cli_runner.invoke(cli, ["db", "init", "--no-create-tables"])

        assert result.exit_code == 0, result.output
        init.assert_awaited_once_with(create_tables=False)
        close.assert_awaited_once()

    def test_init_failure(self, cli_runner):
        failure = OperationalError("SELECT 1", {}, Exception("unable to open database file"))
        with (
            patch("listing_service.infra.database.init_database", new=AsyncMock(side_effect=failure)),
            patch("listing_service.infra.database.close_database", new_callable=AsyncMock) as close,
        ):
            result = cli_runner.invoke(cli, ["db", "init"])

        assert result.exit_code == 1
        close.assert_awaited_once()


def test_export_openapi(cli_runner, tmp_path):
    output = tmp_path / "openapi.json"

    result = cli_runner.invoke(cli, ["export-openapi", "-o", str(output)])

    assert result.exit_code == 0, result.output
    schema = json.loads(output.read_text(encoding="utf-8"))
    assert "/api/v1/accounts" in schema["paths"]
    assert "/api/v1/groups" in schema["paths"]


def test_build_demo_rows():
    now = datetime(2025, 1, 15, 12, 0, tzinfo=UTC)

    rows = build_demo_rows(accounts=20, groups=5, now=now)

    accounts = [row for row in rows if isinstance(row, Account)]
    groups = [row for row in rows if isinstance(row, Group)]
    assert len(accounts) == 20
    assert sum(isinstance(row, ConfigItem) for row in rows) == 2
    assert sum(isinstance(row, Project) for row in rows) == 2
    assert accounts[-1].created_at < now
    assert accounts[0].created_at < accounts[-1].created_at
    assert [group.name for group in groups][:2] == [None, "demo-group-001"]


async def test_seed_demo_data(db_session):
    inserted = await seed_demo_data(db_session, accounts=12, groups=3)

    assert inserted == 12 + 2 + 2 + 3
    assert await db_session.scalar(select(func.count()).select_from(Account)) == 12
    assert await db_session.scalar(select(func.count()).select_from(Group)) == 3
