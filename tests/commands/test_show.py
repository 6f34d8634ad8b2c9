"""Tests for `opsdash show`."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from opsdash.cli import cli

pytestmark = pytest.mark.usefixtures("_isolated_cwd")


class TestShow:
    def test_project(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["show", "projects", "project1"])
        assert result.exit_code == 0, result.output
        assert "E-commerce Website Redesign" in result.output
        assert "John Smith" in result.output
        assert "Alex Chen, David Kim" in result.output

    def test_contract_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "show", "contracts", "contract1"])
        data = json.loads(result.stdout)["data"]
        assert data["kind"] == "contract"
        assert data["total_value"] == 50000.0
        assert data["progress"]["completed"] == 1

    def test_not_found(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["show", "clients", "client99"])
        assert result.exit_code == 1
        assert "No client with id 'client99'" in result.output

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "show", "interns", "intern2"])
        assert result.output.strip() == "intern2"
