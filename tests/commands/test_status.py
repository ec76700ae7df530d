"""Tests for the status CLI command."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from helpers import deps_json

from routergen.cli import cli


@pytest.mark.usefixtures("project")
class TestStatusCommand:
    def test_status_without_snapshot(
        self, cli_runner: CliRunner, two_crates: tuple[Path, Path]
    ) -> None:
        a, _ = two_crates
        result = cli_runner.invoke(
            cli, ["--json", "status", "router", "--deps-json", deps_json((a, "H", "x"))]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["has_snapshot"] is False
        assert data["changed"] is True
        assert data["previous"] == []

    def test_status_after_build(
        self, cli_runner: CliRunner, two_crates: tuple[Path, Path]
    ) -> None:
        a, b = two_crates
        inline = deps_json((a, "H", "x"), (b, "H", "y"))
        cli_runner.invoke(cli, ["build", "router", "--deps-json", inline])

        result = cli_runner.invoke(cli, ["--json", "status", "router", "--deps-json", inline])
        data = json.loads(result.stdout)["data"]
        assert data["has_snapshot"] is True
        assert data["changed"] is False

        reordered = deps_json((b, "H", "y"), (a, "H", "x"))
        result = cli_runner.invoke(cli, ["--json", "status", "router", "--deps-json", reordered])
        assert json.loads(result.stdout)["data"]["changed"] is False

        fewer = deps_json((a, "H", "x"))
        result = cli_runner.invoke(cli, ["--json", "status", "router", "--deps-json", fewer])
        assert json.loads(result.stdout)["data"]["changed"] is True

    def test_status_human(self, cli_runner: CliRunner, two_crates: tuple[Path, Path]) -> None:
        a, _ = two_crates
        result = cli_runner.invoke(cli, ["status", "router", "--deps-json", deps_json((a, "H", "x"))])
        assert result.exit_code == 0
        assert "changed" in result.stdout

    def test_status_does_not_create_target(
        self, cli_runner: CliRunner, project: Path, two_crates: tuple[Path, Path]
    ) -> None:
        a, _ = two_crates
        cli_runner.invoke(cli, ["status", "router", "--deps-json", deps_json((a, "H", "x"))])
        assert not (project / "router").exists()
