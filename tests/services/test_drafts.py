"""Tests for DraftService."""

from __future__ import annotations

import pytest

from opsdash.infrastructure.workspace import Workspace
from opsdash.services.drafts import DraftService


@pytest.fixture
def svc(workspace: Workspace) -> DraftService:
    return DraftService(workspace)


def _milestone(title: str, amount: object) -> dict[str, object]:
    return {
        "title": title,
        "description": f"{title} phase",
        "due_date": "2024-06-01",
        "amount": amount,
    }


class TestContractComposition:
    def test_compose_and_save(self, svc: DraftService, workspace: Workspace) -> None:
        svc.open(
            "contract",
            fields={"title": "Platform", "description": "Build", "client_id": "client3"},
        )
        svc.add_milestone(_milestone("Design", 500))
        result = svc.add_milestone(_milestone("Build", 1500))
        assert result.data["total_value"] == 2000.0
        assert [m["index"] for m in result.data["milestones"]] == [0, 1]

        removed = svc.remove_milestone(0)
        assert removed.data["total_value"] == 1500.0
        assert [m["title"] for m in removed.data["milestones"]] == ["Build"]

        saved = svc.save()
        assert saved.ok
        assert saved.data["outcome"] == "inserted"
        assert saved.data["entity"]["total_value"] == 1500.0
        assert workspace.draft is None
        assert workspace.store.contracts.list()[0].title == "Platform"

    def test_save_without_milestones_keeps_draft(
        self, svc: DraftService, workspace: Workspace
    ) -> None:
        svc.open("contract", fields={"title": "Platform", "description": "Build"})
        result = svc.save()
        assert not result.ok
        assert result.error is not None
        assert result.error.message == "Please add at least one milestone to the contract"
        assert workspace.draft is not None
        assert len(workspace.store.contracts) == 2

    def test_milestones_field_rejected_on_edit(
        self, svc: DraftService, workspace: Workspace
    ) -> None:
        svc.open("contract", "contract1")
        result = svc.update({"milestones": []})
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"
        assert workspace.draft is not None
        assert len(workspace.draft.milestones) == 4  # type: ignore[attr-defined]

    def test_raw_milestone_dicts_rejected(self, svc: DraftService) -> None:
        result = svc.open("contract", fields={"milestones": [_milestone("Design", 500)]})
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"

    @pytest.mark.parametrize("value", ["abc", "1,000"])
    def test_malformed_total_value(self, svc: DraftService, value: str) -> None:
        svc.open("contract")
        result = svc.update({"totalValue": value})
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"
        assert svc.update({"totalValue": "2500"}).data["total_value"] == 2500.0

    def test_zero_amount_milestone(self, svc: DraftService) -> None:
        svc.open("contract")
        result = svc.add_milestone(_milestone("Free", 0))
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"
        assert result.error.detail["errors"] == ["amount is required"]

    def test_remove_out_of_range(self, svc: DraftService) -> None:
        svc.open("contract")
        result = svc.remove_milestone(2)
        assert result.error is not None
        assert result.error.code == "INDEX_OUT_OF_RANGE"

    def test_complete_milestone(self, svc: DraftService) -> None:
        svc.open("contract", "contract1")
        result = svc.complete_milestone(3)
        assert result.data["milestones"][3]["is_completed"] is True
        assert result.data["total_value"] == 50000.0

    def test_edit_existing_contract(self, svc: DraftService, workspace: Workspace) -> None:
        svc.open("contract", "contract1")
        svc.remove_milestone(0)
        result = svc.save()
        assert result.data["outcome"] == "replaced"
        contract = workspace.store.contracts.find("contract1")
        assert contract is not None
        assert contract.total_value == 40000
        record = workspace.event_bus.events[-1]  # type: ignore[union-attr]
        assert record.hook_name == "post_contract_finalized"
        assert record.payload["created"] is False

    def test_milestone_needs_contract_draft(self, svc: DraftService) -> None:
        svc.open("client")
        result = svc.add_milestone(_milestone("Design", 500))
        assert result.error is not None
        assert result.error.message == "No contract draft is open"


class TestDraftLifecycle:
    def test_open_unknown_id(self, svc: DraftService) -> None:
        result = svc.open("client", "client-nope")
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_open_reports_missing(self, svc: DraftService) -> None:
        result = svc.open("client", fields={"name": "Ada"})
        assert result.data["is_new"] is True
        assert result.data["missing"] == ["email", "phone", "company", "address"]

    def test_update_without_draft(self, svc: DraftService) -> None:
        result = svc.update({"name": "x"})
        assert result.error is not None
        assert result.error.code == "NO_DRAFT"

    def test_update_then_save(self, svc: DraftService, workspace: Workspace) -> None:
        svc.open("intern", "intern3")
        svc.update({"status": "Onboard"})
        assert svc.save().ok
        intern = workspace.store.interns.find("intern3")
        assert intern is not None
        assert intern.status == "Onboard"

    def test_discard(self, svc: DraftService, workspace: Workspace) -> None:
        svc.open("project")
        assert svc.discard().data["discarded"] is True
        assert workspace.draft is None
        assert svc.discard().data["discarded"] is False
