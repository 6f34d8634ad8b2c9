"""Tests for `opsdash stats`."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from opsdash.cli import cli

pytestmark = pytest.mark.usefixtures("_isolated_cwd")


class TestStats:
    def test_overview(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["stats"])
        assert result.exit_code == 0, result.output
        assert "Blizon Technologies" in result.output
        assert "Latest Contracts" in result.output
        assert "E-commerce Platform Development" in result.output

    def test_brief_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "stats", "--brief"])
        payload = json.loads(result.stdout)
        assert payload["op"] == "stats"
        assert payload["data"]["total_contract_value"] == 90000.0
        assert "recent_projects" not in payload["data"]

    def test_overview_limits_from_config(self, cli_runner: CliRunner, tmp_path) -> None:
        (tmp_path / "opsdash.toml").write_text("[overview]\nrecent_projects = 1\n")
        result = cli_runner.invoke(cli, ["--json", "stats"])
        data = json.loads(result.stdout)["data"]
        assert len(data["recent_projects"]) == 1
        assert len(data["latest_contracts"]) == 2
