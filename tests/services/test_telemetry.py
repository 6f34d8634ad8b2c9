"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time

from opsdash.services.result import ServiceResult
from opsdash.services.telemetry import (
    Span,
    disable_telemetry,
    enable_telemetry,
    get_current_span,
    trace_span,
    traced,
)


class _Service:
    @traced
    def work(self) -> ServiceResult:
        with trace_span("inner") as span:
            if span is not None:
                span.annotate("rows", 3)
        return ServiceResult(ok=True, op="work")

    @traced
    def plain(self) -> int:
        return 7


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="s").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="s")
        time.sleep(0.002)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_nests_children(self) -> None:
        root = Span(name="root")
        child = Span(name="child", parent=root)
        child.annotate("k", "v")
        root.children.append(child)
        out = root.to_dict()
        assert out["children"][0]["name"] == "child"
        assert out["children"][0]["annotations"] == {"k": "v"}
        assert "annotations" not in out


class TestTraced:
    def test_disabled_leaves_meta_alone(self) -> None:
        assert _Service().work().meta is None

    def test_enabled_attaches_span_tree(self) -> None:
        enable_telemetry()
        result = _Service().work()
        telemetry = result.meta["telemetry"]  # type: ignore[index]
        assert telemetry["name"] == "_Service.work"
        assert telemetry["children"][0]["name"] == "inner"
        assert telemetry["children"][0]["annotations"] == {"rows": 3}

    def test_non_result_passes_through(self) -> None:
        enable_telemetry()
        assert _Service().plain() == 7

    def test_trace_span_outside_traced_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("orphan") as span:
            assert span is None

    def test_current_span(self) -> None:
        assert get_current_span() is None
        enable_telemetry()
        assert get_current_span() is None
        disable_telemetry()
