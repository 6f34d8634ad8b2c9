"""Entity models for the five tracked collections.

All entities are frozen pydantic models and every sequence field is a tuple,
so a collection snapshot can be handed to the presentation layer without
exposing anything it could mutate behind the store's back.

Cross-entity links are ids only (``client_id``, ``project_id``,
``team_member_ids``). They are never validated at write time; lookups of a
dangling id simply return ``None``.

Field names are snake_case; camelCase aliases (``clientId``, ``createdAt``,
...) are accepted on input so seed files exported from the web
dashboard load unchanged.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, computed_field
from pydantic.alias_generators import to_camel

from opsdash.domain.types import EntityKind, InternStatus, ProjectStatus

# Non-negative currency value; exact arithmetic in Python, a plain number in JSON.
Money = Annotated[
    Decimal,
    Field(ge=0),
    PlainSerializer(float, return_type=float, when_used="json"),
]

# Opaque attachment references (file names, URLs). Never parsed.
Attachments = tuple[str, ...]


class Entity(BaseModel):
    """Common base: an ``id`` plus domain fields, immutable once built."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    kind: ClassVar[EntityKind]

    id: str = Field(min_length=1)

    @property
    def label(self) -> str:
        """Display label used in notifications and listings."""
        return str(getattr(self, "name", self.id))


class Client(Entity):
    kind: ClassVar[EntityKind] = EntityKind.CLIENT

    name: str
    email: str
    phone: str
    company: str
    address: str
    created_at: datetime
    photo: str | None = None


class Project(Entity):
    kind: ClassVar[EntityKind] = EntityKind.PROJECT

    name: str
    client_id: str = ""
    description: str
    status: ProjectStatus = ProjectStatus.ACTIVE
    start_date: date
    end_date: date
    team_member_ids: tuple[str, ...] = ()
    documents: Attachments = ()


class TeamMember(Entity):
    kind: ClassVar[EntityKind] = EntityKind.TEAM_MEMBER

    name: str
    email: str
    phone: str
    position: str
    department: str = ""
    joined_date: date
    avatar: str | None = None
    resume: str | None = None


class Intern(Entity):
    kind: ClassVar[EntityKind] = EntityKind.INTERN

    name: str
    email: str
    phone: str
    university: str
    department: str = ""
    status: InternStatus = InternStatus.ONBOARD
    start_date: date
    end_date: date
    resume: str | None = None
    photo: str | None = None


class ContractMilestone(BaseModel):
    """One billable milestone, owned exclusively by its contract."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str = Field(min_length=1)
    title: str
    description: str
    due_date: date
    amount: Money
    is_completed: bool = False
    attachments: Attachments = ()


class Contract(Entity):
    """A client contract billed through ordered milestones.

    ``total_value`` is derived from the milestones and cannot be set; any
    ``totalValue`` present in input data is ignored.
    """

    kind: ClassVar[EntityKind] = EntityKind.CONTRACT

    title: str
    client_id: str = ""
    project_id: str = ""
    description: str
    start_date: date
    end_date: date
    milestones: tuple[ContractMilestone, ...] = ()
    documents: Attachments = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_value(self) -> Money:
        return sum((m.amount for m in self.milestones), Decimal(0))

    @property
    def label(self) -> str:
        return self.title

    @property
    def completed_milestones(self) -> int:
        return sum(1 for m in self.milestones if m.is_completed)

    @property
    def completed_value(self) -> Decimal:
        return sum((m.amount for m in self.milestones if m.is_completed), Decimal(0))


ENTITY_MODELS: dict[EntityKind, type[Entity]] = {
    EntityKind.CLIENT: Client,
    EntityKind.PROJECT: Project,
    EntityKind.TEAM_MEMBER: TeamMember,
    EntityKind.INTERN: Intern,
    EntityKind.CONTRACT: Contract,
}


def get_entity_model(kind: EntityKind) -> type[Entity]:
    """Return the model class registered for *kind*."""
    return ENTITY_MODELS[kind]
