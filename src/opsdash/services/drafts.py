"""DraftService — the form workflow: open, fill, compose milestones, save.

A workspace holds at most one open draft. Contract drafts additionally
carry a milestone ledger whose total always equals the sum of its
milestone amounts. Saving a draft hands it to
:meth:`EntityService.save_draft`; a rejected save keeps the draft open so
the caller can fix it.
"""

from __future__ import annotations

from typing import Any

from opsdash.domain.drafts import DRAFT_TYPES, ContractDraft, Draft, MilestoneDraft, new_draft
from opsdash.domain.errors import OpsdashError
from opsdash.domain.ledger import add_milestone, remove_milestone, set_milestone_completed
from opsdash.domain.types import EntityKind, parse_kind
from opsdash.services.base import BaseService
from opsdash.services.entities import EntityService
from opsdash.services.result import ServiceResult
from opsdash.services.telemetry import traced


def draft_payload(draft: Draft) -> dict[str, Any]:
    data: dict[str, Any] = {
        "kind": draft.kind.value,
        "id": draft.id,
        "is_new": draft.is_new,
        "missing": draft.missing_fields(),
    }
    if isinstance(draft, ContractDraft):
        data["total_value"] = float(draft.total_value)
        data["milestones"] = [
            {"index": i, **m.model_dump(mode="json")} for i, m in enumerate(draft.milestones)
        ]
    return data


class DraftService(BaseService):
    """Operations on the workspace's open draft."""

    @traced
    def open(
        self,
        kind: str | EntityKind,
        entity_id: str | None = None,
        fields: dict[str, Any] | None = None,
    ) -> ServiceResult:
        """Start a new draft, or an edit draft of *entity_id*. Replaces any open draft."""
        op = "draft"
        try:
            entity_kind = parse_kind(str(kind))
        except ValueError as exc:
            return ServiceResult.failure(op, "UNKNOWN_KIND", str(exc), kind=str(kind))

        try:
            if entity_id is None:
                draft = new_draft(entity_kind, **(fields or {}))
            else:
                existing = self._workspace.store.collection(entity_kind).find(entity_id)
                if existing is None:
                    return ServiceResult.failure(
                        op,
                        "NOT_FOUND",
                        f"No {entity_kind.value} with id '{entity_id}'",
                        kind=entity_kind.value,
                        id=entity_id,
                    )
                draft = DRAFT_TYPES[entity_kind].from_entity(existing)
                if fields:
                    draft.set(**fields)
        except OpsdashError as exc:
            return ServiceResult.from_error(op, exc, kind=entity_kind.value)

        self._workspace.draft = draft
        return ServiceResult(ok=True, op=op, data=draft_payload(draft))

    @traced
    def update(self, fields: dict[str, Any]) -> ServiceResult:
        """Set fields on the open draft. Values are not validated until save."""
        op = "draft"
        draft = self._workspace.draft
        if draft is None:
            return self._no_draft(op)
        try:
            draft.set(**fields)
        except OpsdashError as exc:
            return ServiceResult.from_error(op, exc, kind=draft.kind.value)
        return ServiceResult(ok=True, op=op, data=draft_payload(draft))

    @traced
    def add_milestone(self, fields: dict[str, Any]) -> ServiceResult:
        op = "milestone"
        draft = self._contract_draft()
        if draft is None:
            return self._no_contract_draft(op)
        try:
            milestone_input = MilestoneDraft().set(**fields)
            milestone = add_milestone(draft, milestone_input, self._workspace.ids)
        except OpsdashError as exc:
            return ServiceResult.from_error(op, exc, action="add")
        data = draft_payload(draft)
        data.update(action="add", milestone_id=milestone.id)
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    def remove_milestone(self, index: int) -> ServiceResult:
        op = "milestone"
        draft = self._contract_draft()
        if draft is None:
            return self._no_contract_draft(op)
        try:
            removed = remove_milestone(draft, index)
        except OpsdashError as exc:
            return ServiceResult.from_error(op, exc, action="remove", index=index)
        data = draft_payload(draft)
        data.update(action="remove", milestone_id=removed.id)
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    def complete_milestone(self, index: int, completed: bool = True) -> ServiceResult:
        op = "milestone"
        draft = self._contract_draft()
        if draft is None:
            return self._no_contract_draft(op)
        try:
            milestone = set_milestone_completed(draft, index, completed)
        except OpsdashError as exc:
            return ServiceResult.from_error(op, exc, action="complete", index=index)
        data = draft_payload(draft)
        data.update(action="complete", milestone_id=milestone.id)
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    def save(self) -> ServiceResult:
        """Finalize and store the open draft. Closes it on success."""
        draft = self._workspace.draft
        if draft is None:
            return self._no_draft("upsert")
        result = EntityService(self._workspace).save_draft(draft)
        if result.ok:
            self._workspace.draft = None
        return result

    def discard(self) -> ServiceResult:
        had_draft = self._workspace.draft is not None
        self._workspace.draft = None
        return ServiceResult(ok=True, op="discard", data={"discarded": had_draft})

    def _contract_draft(self) -> ContractDraft | None:
        draft = self._workspace.draft
        return draft if isinstance(draft, ContractDraft) else None

    @staticmethod
    def _no_draft(op: str) -> ServiceResult:
        return ServiceResult.failure(op, "NO_DRAFT", "No draft is open")

    @staticmethod
    def _no_contract_draft(op: str) -> ServiceResult:
        return ServiceResult.failure(op, "NO_DRAFT", "No contract draft is open")
