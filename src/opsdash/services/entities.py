"""EntityService — add, replace, remove, look up, and list records.

Mutations go through drafts so every record entering the store passed the
same required-field validation as the dashboard forms. A failed operation
leaves every collection untouched.

Listings follow the dashboard sections: while a search query is active a
section shows that query's matches for its kind, otherwise the whole
collection. A status tab (projects, interns) and a section text filter
narrow it further.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from opsdash.domain.drafts import DRAFT_TYPES, ContractDraft, Draft, new_draft
from opsdash.domain.entities import Client, Contract, Entity, Intern, Project, TeamMember
from opsdash.domain.errors import OpsdashError
from opsdash.domain.ledger import finalize_contract
from opsdash.domain.types import EntityKind, InternStatus, ProjectStatus, parse_kind
from opsdash.infrastructure.store import UpsertOutcome
from opsdash.services._helpers import contains_ci
from opsdash.services.base import BaseService
from opsdash.services.result import ServiceResult
from opsdash.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

STATUS_TABS: dict[EntityKind, type[ProjectStatus] | type[InternStatus]] = {
    EntityKind.PROJECT: ProjectStatus,
    EntityKind.INTERN: InternStatus,
}


def entity_payload(entity: Entity) -> dict[str, Any]:
    """JSON-ready dump of *entity*, tagged with its kind."""
    return {"kind": entity.kind.value, **entity.model_dump(mode="json")}


def contract_progress(contract: Contract) -> dict[str, Any]:
    total = len(contract.milestones)
    return {
        "completed": contract.completed_milestones,
        "total": total,
        "percent": round(contract.completed_milestones / total * 100) if total else 0,
        "completed_value": float(contract.completed_value),
    }


class EntityService(BaseService):
    """CRUD over the five collections of the workspace store."""

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    @traced
    def upsert(self, entity: Entity) -> ServiceResult:
        """Store a fully built record: replace in place or prepend."""
        op = "upsert"
        try:
            outcome = self._workspace.store.collection(entity.kind).upsert(entity)
        except OpsdashError as exc:
            return ServiceResult.from_error(op, exc, kind=entity.kind.value)
        self._workspace.ids.reserve(entity.id)
        return self._stored(op, entity, outcome)

    @traced
    def upsert_fields(self, kind: str | EntityKind, fields: dict[str, Any]) -> ServiceResult:
        """Build a record from raw *fields* and store it.

        With an ``id`` of an existing record the fields are applied on top
        of it (edit). With an unknown ``id`` a new record keeps that id.
        Without ``id`` a fresh one is issued.
        """
        op = "upsert"
        try:
            entity_kind = parse_kind(str(kind))
        except ValueError as exc:
            return ServiceResult.failure(op, "UNKNOWN_KIND", str(exc), kind=str(kind))

        fields = dict(fields)
        entity_id = fields.pop("id", None)
        existing = None
        if entity_id:
            existing = self._workspace.store.collection(entity_kind).find(str(entity_id))
        try:
            if existing is not None:
                draft = DRAFT_TYPES[entity_kind].from_entity(existing).set(**fields)
            else:
                draft = new_draft(entity_kind, **fields)
                if entity_id:
                    draft.id = str(entity_id)
        except OpsdashError as exc:
            return ServiceResult.from_error(op, exc, kind=entity_kind.value)
        return self.save_draft(draft)

    @traced
    def save_draft(self, draft: Draft) -> ServiceResult:
        """Finalize *draft* and store the result. The draft is unchanged on failure."""
        op = "upsert"
        created = draft.is_new
        try:
            with trace_span("finalize"):
                if isinstance(draft, ContractDraft):
                    entity: Entity = finalize_contract(draft, self._workspace.ids)
                else:
                    entity = draft.finalize(self._workspace.ids)
        except OpsdashError as exc:
            logger.debug("Rejected %s draft: %s", draft.kind.value, exc.message)
            return ServiceResult.from_error(op, exc, kind=draft.kind.value)

        result = self.upsert(entity)
        if result.ok and isinstance(entity, Contract):
            warnings = list(result.warnings)
            self._dispatch_event(
                "post_contract_finalized",
                {
                    "contract_id": entity.id,
                    "title": entity.title,
                    "total_value": float(entity.total_value),
                    "milestones": len(entity.milestones),
                    "created": created,
                },
                warnings,
            )
            result = result.model_copy(update={"warnings": warnings})
        return result

    @traced
    def remove(self, kind: str | EntityKind, entity_id: str) -> ServiceResult:
        """Delete a record. An unknown id is a successful no-op."""
        op = "remove"
        try:
            entity_kind = parse_kind(str(kind))
        except ValueError as exc:
            return ServiceResult.failure(op, "UNKNOWN_KIND", str(exc), kind=str(kind))

        removed = self._workspace.store.collection(entity_kind).remove(entity_id)
        warnings: list[str] = []
        self._dispatch_event(
            "post_remove",
            {"kind": entity_kind.value, "entity_id": entity_id, "removed": removed},
            warnings,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={"kind": entity_kind.value, "id": entity_id, "removed": removed},
            warnings=warnings,
        )

    def _stored(self, op: str, entity: Entity, outcome: UpsertOutcome) -> ServiceResult:
        inserted = outcome is UpsertOutcome.INSERTED
        warnings: list[str] = []
        self._dispatch_event(
            "post_upsert",
            {
                "kind": entity.kind.value,
                "entity_id": entity.id,
                "label": entity.label,
                "inserted": inserted,
            },
            warnings,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "kind": entity.kind.value,
                "id": entity.id,
                "outcome": outcome.value,
                "entity": entity.model_dump(mode="json"),
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @traced
    def get(self, kind: str | EntityKind, entity_id: str) -> ServiceResult:
        """One record plus its resolved references.

        Dangling references resolve to ``None``; the renderer shows them
        as "Unknown".
        """
        op = "get"
        try:
            entity_kind = parse_kind(str(kind))
        except ValueError as exc:
            return ServiceResult.failure(op, "UNKNOWN_KIND", str(exc), kind=str(kind))

        entity = self._workspace.store.collection(entity_kind).find(entity_id)
        if entity is None:
            return ServiceResult.failure(
                op,
                "NOT_FOUND",
                f"No {entity_kind.value} with id '{entity_id}'",
                kind=entity_kind.value,
                id=entity_id,
            )
        data = entity_payload(entity)
        data["refs"] = self._resolve_refs(entity)
        if isinstance(entity, Contract):
            data["progress"] = contract_progress(entity)
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    def list_items(
        self,
        kind: str | EntityKind,
        *,
        status: str | None = None,
        text: str | None = None,
    ) -> ServiceResult:
        """Section listing for *kind* with optional status tab and text filter."""
        op = "list"
        try:
            entity_kind = parse_kind(str(kind))
        except ValueError as exc:
            return ServiceResult.failure(op, "UNKNOWN_KIND", str(exc), kind=str(kind))

        search = self._workspace.search
        items: tuple[Entity, ...]
        if search.is_active:
            items = search.results.for_kind(entity_kind)
        else:
            items = self._workspace.store.collection(entity_kind).list()
        total = len(items)

        if status is not None:
            tab = STATUS_TABS.get(entity_kind)
            if tab is None:
                return ServiceResult.failure(
                    op,
                    "INVALID_FILTER",
                    f"{entity_kind.value} records have no status",
                    kind=entity_kind.value,
                )
            try:
                wanted = tab(status)
            except ValueError:
                valid = ", ".join(s.value for s in tab)
                return ServiceResult.failure(
                    op,
                    "INVALID_FILTER",
                    f"Unknown {entity_kind.value} status '{status}' (expected one of: {valid})",
                    kind=entity_kind.value,
                )
            items = tuple(e for e in items if getattr(e, "status", None) == wanted)

        if text:
            matcher = self._section_matcher(entity_kind)
            items = tuple(e for e in items if matcher(e, text))

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "kind": entity_kind.value,
                "items": [e.model_dump(mode="json") for e in items],
                "count": len(items),
                "total": total,
                "search_query": search.active_query if search.is_active else None,
                "status": status,
                "filter": text,
                "refs": {e.id: self._resolve_refs(e) for e in items},
            },
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _resolve_refs(self, entity: Entity) -> dict[str, Any]:
        store = self._workspace.store
        if isinstance(entity, Project):
            client = store.clients.find(entity.client_id)
            return {
                "client": client.name if client else None,
                "team_members": [
                    member.name if member else None
                    for member in (store.team_members.find(mid) for mid in entity.team_member_ids)
                ],
            }
        if isinstance(entity, Contract):
            client = store.clients.find(entity.client_id)
            project = store.projects.find(entity.project_id)
            return {
                "client": client.name if client else None,
                "project": project.name if project else None,
            }
        return {}

    def _section_matcher(self, kind: EntityKind) -> Callable[[Any, str], bool]:
        """Per-section text filter, matching the dashboard's section search boxes."""
        store = self._workspace.store

        def client(c: Client, q: str) -> bool:
            return contains_ci(c.name, q) or contains_ci(c.company, q)

        def project(p: Project, q: str) -> bool:
            return contains_ci(p.name, q) or contains_ci(p.description, q)

        def team_member(m: TeamMember, q: str) -> bool:
            return any(contains_ci(v, q) for v in (m.name, m.position, m.department))

        def intern(i: Intern, q: str) -> bool:
            return any(contains_ci(v, q) for v in (i.name, i.university, i.department))

        def contract(c: Contract, q: str) -> bool:
            client_rec = store.clients.find(c.client_id)
            project_rec = store.projects.find(c.project_id)
            return (
                contains_ci(c.title, q)
                or contains_ci(client_rec.name if client_rec else None, q)
                or contains_ci(project_rec.name if project_rec else None, q)
            )

        return {
            EntityKind.CLIENT: client,
            EntityKind.PROJECT: project,
            EntityKind.TEAM_MEMBER: team_member,
            EntityKind.INTERN: intern,
            EntityKind.CONTRACT: contract,
        }[kind]


__all__ = ["EntityService", "contract_progress", "entity_payload"]
