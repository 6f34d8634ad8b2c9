"""Tests for the in-memory entity store."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from opsdash.domain.entities import Client, Project
from opsdash.domain.errors import ValidationError
from opsdash.domain.seed import builtin_seed
from opsdash.domain.types import EntityKind
from opsdash.infrastructure.store import EntityCollection, EntityStore, UpsertOutcome
from tests.conftest import client_fields


def _client(client_id: str, **overrides: str) -> Client:
    created = datetime(2024, 1, 1, tzinfo=UTC)
    return Client(id=client_id, created_at=created, **client_fields(**overrides))


@pytest.fixture
def store() -> EntityStore:
    return EntityStore.from_seed(builtin_seed())


class TestUpsert:
    def test_unknown_id_prepends(self, store: EntityStore) -> None:
        outcome = store.clients.upsert(_client("client-new"))
        assert outcome is UpsertOutcome.INSERTED
        assert [c.id for c in store.clients][:2] == ["client-new", "client1"]
        assert len(store.clients) == 5

    def test_known_id_replaces_in_place(self, store: EntityStore) -> None:
        outcome = store.clients.upsert(_client("client3", name="Renamed"))
        assert outcome is UpsertOutcome.REPLACED
        ids = [c.id for c in store.clients]
        assert ids == ["client1", "client2", "client3", "client4"]
        assert store.clients.find("client3").name == "Renamed"  # type: ignore[union-attr]

    def test_repeat_upsert_is_idempotent(self, store: EntityStore) -> None:
        client = _client("client-new")
        store.clients.upsert(client)
        once = store.snapshot()
        assert store.clients.upsert(client) is UpsertOutcome.REPLACED
        assert store.snapshot() == once
        assert [c.id for c in store.clients].count("client-new") == 1

    def test_wrong_kind_rejected(self, store: EntityStore) -> None:
        project = store.projects.list()[0]
        with pytest.raises(ValidationError, match="cannot be stored"):
            store.clients.upsert(project)  # type: ignore[arg-type]

    def test_collections_are_independent(self, store: EntityStore) -> None:
        before = store.snapshot()
        store.clients.upsert(_client("client-new"))
        after = store.snapshot()
        assert after.projects == before.projects
        assert after.contracts == before.contracts
        assert len(after.clients) == len(before.clients) + 1


class TestRemove:
    def test_unknown_id_is_noop(self, store: EntityStore) -> None:
        before = store.clients.list()
        assert store.clients.remove("client-missing") is False
        assert store.clients.list() == before

    def test_order_preserved(self, store: EntityStore) -> None:
        assert store.clients.remove("client2") is True
        assert [c.id for c in store.clients] == ["client1", "client3", "client4"]
        assert "client2" not in store.clients

    def test_dangling_references_tolerated(self, store: EntityStore) -> None:
        store.clients.remove("client1")
        project = store.projects.find("project1")
        assert project is not None
        assert project.client_id == "client1"
        assert store.clients.find(project.client_id) is None


class TestCollection:
    def test_duplicate_seed_ids_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Duplicate client id"):
            EntityCollection(EntityKind.CLIENT, [_client("c1"), _client("c1")])

    def test_snapshot_is_immutable(self, store: EntityStore) -> None:
        snapshot = store.clients.list()
        store.clients.upsert(_client("client-new"))
        assert len(snapshot) == 4
        assert isinstance(snapshot, tuple)

    def test_kind(self) -> None:
        assert EntityCollection[Project](EntityKind.PROJECT).kind is EntityKind.PROJECT


class TestEntityStore:
    def test_counts(self, store: EntityStore) -> None:
        assert store.counts() == {
            "client": 4,
            "project": 4,
            "team_member": 4,
            "intern": 3,
            "contract": 2,
        }

    def test_empty(self) -> None:
        assert sum(EntityStore().counts().values()) == 0

    def test_all_ids_include_milestones(self, store: EntityStore) -> None:
        ids = set(store.all_ids())
        assert {"client1", "team4", "contract2", "milestone1-1", "milestone2-4"} <= ids

    def test_snapshot_for_kind(self, store: EntityStore) -> None:
        snapshot = store.snapshot()
        assert snapshot.for_kind(EntityKind.INTERN) == snapshot.interns
