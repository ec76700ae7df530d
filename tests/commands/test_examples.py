"""Tests for the --examples flag on every command."""

import pytest
from click.testing import CliRunner

from routergen.cli import cli


@pytest.mark.parametrize("command", ["build", "render", "status"])
def test_examples_flag(cli_runner: CliRunner, command: str) -> None:
    result = cli_runner.invoke(cli, [command, "--examples"])
    assert result.exit_code == 0
    assert "Examples for" in result.output
    assert f"routergen {command}" in result.output


def test_examples_not_in_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["build", "--help"])
    assert result.exit_code == 0
    assert "--examples" in result.output
    assert "routergen build ./router true" not in result.output
