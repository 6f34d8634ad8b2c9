"""Tests for `opsdash run`."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from opsdash.cli import cli

pytestmark = pytest.mark.usefixtures("_isolated_cwd")


def _write(tmp_path: Path, steps: Any) -> str:
    path = tmp_path / "session.json"
    path.write_text(json.dumps(steps), encoding="utf-8")
    return str(path)


CONTRACT_SESSION = [
    {"op": "draft", "kind": "contract", "fields": {"title": "Site", "description": "Build"}},
    {"op": "milestone", "fields": {"title": "Design", "description": "d", "amount": 500}},
    {"op": "milestone", "fields": {"title": "Build", "description": "b", "amount": 1500}},
    {"op": "finalize"},
]


class TestRun:
    def test_contract_session(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "run", _write(tmp_path, CONTRACT_SESSION)])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["failed"] == 0
        finalize = data["steps"][-1]["result"]["data"]
        assert finalize["entity"]["total_value"] == 2000.0
        assert data["counts"]["contract"] == 3

    def test_human_output(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["run", _write(tmp_path, CONTRACT_SESSION)])
        assert result.exit_code == 0
        assert "Contract added successfully" in result.output
        assert "Site has been added to your contracts." in result.output

    def test_stdin(self, cli_runner: CliRunner) -> None:
        steps = [{"op": "type", "query": "Jo"}, {"op": "type", "query": "Johnson"}]
        steps.append({"op": "wait", "ms": 300})
        result = cli_runner.invoke(cli, ["--json", "run", "-"], input=json.dumps(steps))
        data = json.loads(result.stdout)["data"]
        assert data["evaluations"] == 1
        assert data["view"] == "clients"

    def test_failed_step_exits_1(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        steps = [{"op": "milestone", "fields": {"title": "x"}}]
        result = cli_runner.invoke(cli, ["run", _write(tmp_path, steps)])
        assert result.exit_code == 1
        assert "No contract draft is open" in result.output

    def test_invalid_script(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["run", _write(tmp_path, [{"op": "jump"}])])
        assert result.exit_code == 1
        assert "Script failed validation" in result.output

    def test_invalid_json(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("[{", encoding="utf-8")
        result = cli_runner.invoke(cli, ["run", str(path)])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output
