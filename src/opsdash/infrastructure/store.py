"""In-memory entity store — five independent keyed collections.

Each :class:`EntityCollection` is tagged with one entity kind and only
accepts that kind's model. Collections never reference each other, so
mutating one can never disturb another.

Ordering is newest-first: an upsert of an unknown id prepends, an upsert
of a known id replaces the record where it stands.

INVARIANT: ids are unique within a collection.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum

from opsdash.domain.entities import (
    Client,
    Contract,
    Entity,
    Intern,
    Project,
    TeamMember,
    get_entity_model,
)
from opsdash.domain.errors import ValidationError
from opsdash.domain.seed import SeedData
from opsdash.domain.types import EntityKind

logger = logging.getLogger(__name__)


class UpsertOutcome(StrEnum):
    """What an upsert did to the collection."""

    INSERTED = "inserted"
    REPLACED = "replaced"


class EntityCollection[E: Entity]:
    """Ordered, id-keyed collection for a single entity kind.

    Args:
        kind: The entity kind this collection holds.
        seed: Initial records in display order. The collection keeps its own copy.
    """

    def __init__(self, kind: EntityKind, seed: Iterable[E] = ()) -> None:
        self._kind = kind
        self._model = get_entity_model(kind)
        self._items: list[E] = []
        seen: set[str] = set()
        for entity in seed:
            self._check_kind(entity)
            if entity.id in seen:
                msg = f"Duplicate {kind.value} id in seed data: {entity.id}"
                raise ValidationError(msg)
            seen.add(entity.id)
            self._items.append(entity)

    @property
    def kind(self) -> EntityKind:
        return self._kind

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[E]:
        return iter(tuple(self._items))

    def __contains__(self, entity_id: object) -> bool:
        return any(item.id == entity_id for item in self._items)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def upsert(self, entity: E) -> UpsertOutcome:
        """Replace the record with the same id in place, or prepend a new one."""
        self._check_kind(entity)
        index = self._index_of(entity.id)
        if index is None:
            self._items.insert(0, entity)
            logger.debug("Inserted %s %s", self._kind.value, entity.id)
            return UpsertOutcome.INSERTED
        self._items[index] = entity
        logger.debug("Replaced %s %s at position %d", self._kind.value, entity.id, index)
        return UpsertOutcome.REPLACED

    def remove(self, entity_id: str) -> bool:
        """Delete the record with *entity_id*. Returns False (no error) if absent."""
        index = self._index_of(entity_id)
        if index is None:
            logger.debug("Remove of unknown %s %s ignored", self._kind.value, entity_id)
            return False
        del self._items[index]
        logger.debug("Removed %s %s", self._kind.value, entity_id)
        return True

    def list(self) -> tuple[E, ...]:
        """Immutable snapshot in store order."""
        return tuple(self._items)

    def find(self, entity_id: str) -> E | None:
        """Optional-result lookup. Dangling references resolve to None."""
        index = self._index_of(entity_id)
        return None if index is None else self._items[index]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _index_of(self, entity_id: str) -> int | None:
        for i, item in enumerate(self._items):
            if item.id == entity_id:
                return i
        return None

    def _check_kind(self, entity: Entity) -> None:
        if not isinstance(entity, self._model):
            msg = (
                f"{type(entity).__name__} cannot be stored in the "
                f"{self._kind.value} collection"
            )
            raise ValidationError(msg, [f"kind: expected {self._kind.value}"])


@dataclass(frozen=True)
class StoreSnapshot:
    """Point-in-time view of all five collections."""

    clients: tuple[Client, ...]
    projects: tuple[Project, ...]
    team_members: tuple[TeamMember, ...]
    interns: tuple[Intern, ...]
    contracts: tuple[Contract, ...]

    def for_kind(self, kind: EntityKind) -> tuple[Entity, ...]:
        return {
            EntityKind.CLIENT: self.clients,
            EntityKind.PROJECT: self.projects,
            EntityKind.TEAM_MEMBER: self.team_members,
            EntityKind.INTERN: self.interns,
            EntityKind.CONTRACT: self.contracts,
        }[kind]


class EntityStore:
    """The five entity collections of one dashboard session."""

    def __init__(self, seed: SeedData | None = None) -> None:
        seed = seed or SeedData()
        self.clients: EntityCollection[Client] = EntityCollection(EntityKind.CLIENT, seed.clients)
        self.projects: EntityCollection[Project] = EntityCollection(
            EntityKind.PROJECT, seed.projects
        )
        self.team_members: EntityCollection[TeamMember] = EntityCollection(
            EntityKind.TEAM_MEMBER, seed.team_members
        )
        self.interns: EntityCollection[Intern] = EntityCollection(EntityKind.INTERN, seed.interns)
        self.contracts: EntityCollection[Contract] = EntityCollection(
            EntityKind.CONTRACT, seed.contracts
        )

    @classmethod
    def from_seed(cls, seed: SeedData) -> EntityStore:
        return cls(seed)

    def collection(self, kind: EntityKind) -> EntityCollection[Entity]:
        """Return the collection for *kind*."""
        return {  # type: ignore[return-value]
            EntityKind.CLIENT: self.clients,
            EntityKind.PROJECT: self.projects,
            EntityKind.TEAM_MEMBER: self.team_members,
            EntityKind.INTERN: self.interns,
            EntityKind.CONTRACT: self.contracts,
        }[kind]

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            clients=self.clients.list(),
            projects=self.projects.list(),
            team_members=self.team_members.list(),
            interns=self.interns.list(),
            contracts=self.contracts.list(),
        )

    def all_ids(self) -> Iterator[str]:
        """Every id currently held, across all collections."""
        for kind in EntityKind:
            for entity in self.collection(kind):
                yield entity.id
                if isinstance(entity, Contract):
                    yield from (m.id for m in entity.milestones)

    def counts(self) -> dict[str, int]:
        return {kind.value: len(self.collection(kind)) for kind in EntityKind}
