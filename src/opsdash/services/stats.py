"""StatsService — dashboard headline numbers and the overview page."""

from __future__ import annotations

from collections import Counter
from decimal import Decimal
from typing import Any

from opsdash.domain.types import InternStatus, ProjectStatus
from opsdash.services.base import BaseService
from opsdash.services.entities import contract_progress
from opsdash.services.result import ServiceResult
from opsdash.services.telemetry import traced

DEADLINE_STATUSES = frozenset({ProjectStatus.ACTIVE, ProjectStatus.WORKING})


class StatsService(BaseService):
    """Aggregate counts over the current store contents."""

    @traced
    def summary(self) -> ServiceResult:
        return ServiceResult(ok=True, op="stats", data=self._summary())

    @traced
    def overview(self) -> ServiceResult:
        """Headline stats plus the overview panels.

        Recent projects and latest contracts are the first N in store order
        (newest first). Upcoming deadlines are Active and Working projects
        ordered by end date.
        """
        ws = self._workspace
        limits = ws.settings.overview
        snap = ws.store.snapshot()

        def client_name(client_id: str) -> str | None:
            client = ws.store.clients.find(client_id)
            return client.name if client else None

        recent = [
            {
                "id": p.id,
                "name": p.name,
                "client": client_name(p.client_id),
                "status": p.status.value,
            }
            for p in snap.projects[: limits.recent_projects]
        ]
        latest = [
            {
                "id": c.id,
                "title": c.title,
                "client": client_name(c.client_id),
                "total_value": float(c.total_value),
                "progress": contract_progress(c),
            }
            for c in snap.contracts[: limits.latest_contracts]
        ]
        upcoming = sorted(
            (p for p in snap.projects if p.status in DEADLINE_STATUSES),
            key=lambda p: p.end_date,
        )[: limits.upcoming_deadlines]
        deadlines = [
            {
                "id": p.id,
                "name": p.name,
                "description": p.description,
                "end_date": p.end_date.isoformat(),
            }
            for p in upcoming
        ]

        data = self._summary()
        data.update(
            workspace=ws.settings.workspace.name,
            view=ws.view.current.value,
            recent_projects=recent,
            latest_contracts=latest,
            upcoming_deadlines=deadlines,
        )
        return ServiceResult(ok=True, op="overview", data=data)

    def _summary(self) -> dict[str, Any]:
        snap = self._workspace.store.snapshot()
        project_status = Counter(p.status for p in snap.projects)
        intern_status = Counter(i.status for i in snap.interns)
        total_value = sum((c.total_value for c in snap.contracts), Decimal(0))
        completed_value = sum((c.completed_value for c in snap.contracts), Decimal(0))
        return {
            "total_clients": len(snap.clients),
            "active_projects": project_status[ProjectStatus.ACTIVE],
            "team_members": len(snap.team_members),
            "interns": len(snap.interns),
            "contracts": len(snap.contracts),
            "projects_by_status": {s.value: project_status[s] for s in ProjectStatus},
            "interns_by_status": {s.value: intern_status[s] for s in InternStatus},
            "total_contract_value": float(total_value),
            "completed_milestone_value": float(completed_value),
        }
