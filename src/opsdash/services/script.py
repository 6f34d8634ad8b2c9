"""ScriptService — replay a list of dashboard operations in one session.

State lives only as long as the process, so a script is how a single CLI
invocation exercises mutations, the milestone ledger, and debounced
search together. Each step is validated up front; execution continues
past failed steps and reports every outcome.

Step shapes (``op`` selects the kind)::

    {"op": "upsert", "kind": "client", "fields": {...}}
    {"op": "remove", "kind": "client", "id": "client1"}
    {"op": "draft", "kind": "contract", "id": null, "fields": {...}}
    {"op": "draft", "fields": {...}}              # update the open draft
    {"op": "milestone", "action": "add", "fields": {...}}
    {"op": "milestone", "action": "remove", "index": 0}
    {"op": "milestone", "action": "complete", "index": 1, "completed": true}
    {"op": "finalize"}
    {"op": "type", "query": "joh"}                # debounced keystroke
    {"op": "wait", "ms": 300}                     # advance the virtual clock
    {"op": "submit", "query": "Johnson"}          # evaluate immediately
    {"op": "navigate", "section": "calendar"}
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal

import pydantic
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from opsdash.infrastructure.scheduler import ManualScheduler
from opsdash.services.base import BaseService
from opsdash.services.drafts import DraftService
from opsdash.services.entities import EntityService
from opsdash.services.navigation import NavigationService
from opsdash.services.result import ServiceResult
from opsdash.services.search import SearchService
from opsdash.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class _Step(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class UpsertStep(_Step):
    op: Literal["upsert"]
    kind: str
    fields: dict[str, Any]


class RemoveStep(_Step):
    op: Literal["remove"]
    kind: str
    id: str


class DraftStep(_Step):
    op: Literal["draft"]
    kind: str | None = None
    id: str | None = None
    fields: dict[str, Any] = Field(default_factory=dict)


class MilestoneStep(_Step):
    op: Literal["milestone"]
    action: Literal["add", "remove", "complete"] = "add"
    fields: dict[str, Any] = Field(default_factory=dict)
    index: int | None = None
    completed: bool = True


class FinalizeStep(_Step):
    op: Literal["finalize"]


class TypeStep(_Step):
    op: Literal["type"]
    query: str


class WaitStep(_Step):
    op: Literal["wait"]
    ms: float = Field(ge=0)


class SubmitStep(_Step):
    op: Literal["submit"]
    query: str


class NavigateStep(_Step):
    op: Literal["navigate"]
    section: str


Step = Annotated[
    UpsertStep
    | RemoveStep
    | DraftStep
    | MilestoneStep
    | FinalizeStep
    | TypeStep
    | WaitStep
    | SubmitStep
    | NavigateStep,
    Field(discriminator="op"),
]

_STEPS = TypeAdapter(list[Step])


def parse_steps(raw: Any) -> list[Step]:
    """Validate raw script data. Accepts a list or ``{"steps": [...]}``."""
    if isinstance(raw, dict) and "steps" in raw:
        raw = raw["steps"]
    return _STEPS.validate_python(raw)


class ScriptService(BaseService):
    """Run a scripted session against the workspace."""

    @traced
    def run(self, raw_steps: Any) -> ServiceResult:
        op = "run"
        try:
            steps = parse_steps(raw_steps)
        except pydantic.ValidationError as exc:
            errors = [
                f"{'.'.join(str(p) for p in err['loc']) or 'script'}: {err['msg']}"
                for err in exc.errors()
            ]
            return ServiceResult.failure(
                op, "INVALID_SCRIPT", "Script failed validation", errors=errors
            )

        outcomes: list[dict[str, Any]] = []
        warnings: list[str] = []
        for index, step in enumerate(steps):
            with trace_span(f"step.{step.op}"):
                result = self._execute(step)
            warnings.extend(result.warnings)
            outcomes.append(
                {
                    "index": index,
                    "op": step.op,
                    "ok": result.ok,
                    "summary": _summarize(step, result),
                    "result": result.model_dump(mode="json", exclude={"meta"}),
                }
            )
            if not result.ok:
                logger.debug("Step %d (%s) failed: %s", index, step.op, result.error)

        ws = self._workspace
        notifications = ws.notifications
        scheduler = ws.scheduler
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "steps": outcomes,
                "failed": sum(1 for o in outcomes if not o["ok"]),
                "view": ws.view.current.value,
                "search_query": ws.search.active_query if ws.search.is_active else None,
                "pending_search": ws.search.pending_query,
                "evaluations": ws.search.evaluations,
                "clock_ms": scheduler.now if isinstance(scheduler, ManualScheduler) else None,
                "counts": ws.store.counts(),
                "notifications": (
                    [n.to_dict() for n in notifications.drain()] if notifications else []
                ),
            },
            warnings=warnings,
        )

    def _execute(self, step: Step) -> ServiceResult:
        ws = self._workspace
        match step:
            case UpsertStep():
                return EntityService(ws).upsert_fields(step.kind, step.fields)
            case RemoveStep():
                return EntityService(ws).remove(step.kind, step.id)
            case DraftStep(kind=None):
                return DraftService(ws).update(step.fields)
            case DraftStep():
                return DraftService(ws).open(step.kind, step.id, step.fields)
            case MilestoneStep(action="add"):
                return DraftService(ws).add_milestone(step.fields)
            case MilestoneStep(index=None):
                return ServiceResult.failure(
                    "milestone", "VALIDATION_FAILED", f"Milestone {step.action} needs an index"
                )
            case MilestoneStep(action="remove"):
                return DraftService(ws).remove_milestone(step.index)
            case MilestoneStep():
                return DraftService(ws).complete_milestone(step.index, step.completed)
            case FinalizeStep():
                return DraftService(ws).save()
            case TypeStep():
                return SearchService(ws).type(step.query)
            case WaitStep():
                return self._wait(step.ms)
            case SubmitStep():
                return SearchService(ws).search(step.query)
            case NavigateStep():
                return NavigationService(ws).navigate(step.section)
        msg = f"Unhandled step: {step!r}"
        raise AssertionError(msg)

    def _wait(self, ms: float) -> ServiceResult:
        scheduler = self._workspace.scheduler
        if not isinstance(scheduler, ManualScheduler):
            return ServiceResult.failure(
                "wait", "UNSUPPORTED", "wait steps need the virtual clock scheduler"
            )
        fired = scheduler.advance(ms)
        return ServiceResult(
            ok=True,
            op="wait",
            data={"ms": ms, "fired": fired, "clock_ms": scheduler.now},
        )


def _summarize(step: Step, result: ServiceResult) -> str:
    """One-line description of a step outcome."""
    if not result.ok:
        return result.error.message if result.error else "failed"
    d = result.data
    match step:
        case UpsertStep() | FinalizeStep():
            return f"{d['outcome']} {d['kind']} {d['id']}"
        case RemoveStep():
            return f"removed {d['id']}" if d["removed"] else f"{d['id']} not present"
        case DraftStep() | MilestoneStep():
            parts = [f"{d['kind']} draft"]
            if "total_value" in d:
                parts.append(f"total={d['total_value']:g}")
                parts.append(f"milestones={len(d['milestones'])}")
            return " ".join(parts)
        case TypeStep():
            return f"typed {step.query!r}"
        case WaitStep():
            return f"clock {d['clock_ms']:g} ms, {d['fired']} evaluation(s)"
        case SubmitStep():
            if d["no_results"]:
                return f"no results for {step.query!r}"
            counts = ", ".join(f"{k}={v}" for k, v in d["counts"].items() if v)
            return f"{counts or 'cleared'} → {d['view']['current']}"
        case NavigateStep():
            return f"{d['previous']} → {d['current']}"
    return result.op
