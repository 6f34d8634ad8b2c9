"""Tests for the format_result dispatcher and OutputSettings."""

import json

import pytest

from opsdash.output.formatters import OutputSettings, format_result
from opsdash.services.result import ServiceError, ServiceResult


def _ok(op: str = "test", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "test", msg: str = "fail") -> ServiceResult:
    return ServiceResult(ok=False, op=op, error=ServiceError(code="ERR", message=msg))


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False

    def test_frozen(self) -> None:
        s = OutputSettings(json_output=True)
        with pytest.raises(AttributeError):
            s.quiet = True  # type: ignore[misc]


class TestFormatResult:
    def test_json_mode_returns_valid_json(self) -> None:
        settings = OutputSettings(json_output=True)
        output = format_result(_ok("remove", id="client1"), settings=settings)
        data = json.loads(output)
        assert data["ok"] is True
        assert data["op"] == "remove"
        assert data["data"] == {"id": "client1"}

    def test_json_mode_error(self) -> None:
        output = format_result(_err(msg="nope"), settings=OutputSettings(json_output=True))
        assert json.loads(output)["error"]["message"] == "nope"

    def test_quiet_mode(self) -> None:
        output = format_result(_ok("remove", id="client1"), settings=OutputSettings(quiet=True))
        assert output == "client1"

    def test_default_is_human(self) -> None:
        output = format_result(_ok("navigate", previous="overview", current="team", reason="x"))
        assert output.startswith("OK")
        assert "overview → team" in output
