"""Draft builders — entities under construction.

A draft collects fields incrementally (one form field at a time) with no
validation on assignment. Required-field checks and type validation happen
only in :meth:`Draft.finalize`, which either returns a frozen entity or
raises :class:`~opsdash.domain.errors.ValidationError` and leaves the draft
untouched.

A draft built with :meth:`Draft.from_entity` edits an existing record: it
keeps the record's id (so saving it replaces in place) and immutable fields
such as ``Client.created_at``.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar, Self

import pydantic
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic.alias_generators import to_camel

from opsdash.domain.entities import (
    Client,
    Contract,
    ContractMilestone,
    Entity,
    Intern,
    Project,
    TeamMember,
)
from opsdash.domain.errors import ValidationError
from opsdash.domain.ids import IdGenerator
from opsdash.domain.types import EntityKind, InternStatus, ProjectStatus


def is_missing(value: Any) -> bool:
    """True for ``None`` and blank strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _parse_total(value: Any) -> Decimal:
    """Parse a contract total. Rejects non-numeric, non-finite and negative input."""
    try:
        total = Decimal(str(value).strip())
    except InvalidOperation as exc:
        msg = f"Invalid total_value: {value!r}"
        raise ValidationError(msg, ["total_value: not a number"]) from exc
    if not total.is_finite() or total < 0:
        msg = f"Invalid total_value: {value!r}"
        raise ValidationError(msg, ["total_value: must be a finite amount of zero or more"])
    return total


def _format_pydantic_errors(exc: pydantic.ValidationError) -> list[str]:
    lines: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "value"
        lines.append(f"{loc}: {err['msg']}")
    return lines


class _FieldBag(BaseModel):
    """Shared field handling: unvalidated assignment, required-field checks."""

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        validate_assignment=False,
    )

    required_fields: ClassVar[tuple[str, ...]] = ()

    def _label(self) -> str:
        return "draft"

    def set(self, **fields: Any) -> Self:
        """Assign fields without validating their values. Returns self for chaining.

        Field names may be snake_case or camelCase. Unknown names are rejected.
        """
        model_fields = type(self).model_fields
        by_alias = {info.alias: name for name, info in model_fields.items() if info.alias}
        for key, value in fields.items():
            name = key if key in model_fields else by_alias.get(key)
            if name is None or name == "id":
                msg = f"Unknown {self._label()} field: {key}"
                raise ValidationError(msg)
            setattr(self, name, value)
        return self

    def missing_fields(self) -> list[str]:
        """Required fields that are currently unset or blank."""
        return [name for name in self.required_fields if is_missing(getattr(self, name))]

    def values(self) -> dict[str, Any]:
        """Raw field values, exactly as assigned."""
        return {name: getattr(self, name) for name in type(self).model_fields}


class Draft(_FieldBag):
    """Base for entity drafts. Subclasses declare the target model and required fields."""

    entity_model: ClassVar[type[Entity]]

    id: str | None = None

    _creating: bool = PrivateAttr(default=True)

    @property
    def kind(self) -> EntityKind:
        return self.entity_model.kind

    def _label(self) -> str:
        return self.kind.value

    @property
    def is_new(self) -> bool:
        """True unless the draft was opened from a stored record.

        A new draft may carry a caller-chosen id; it is still a creation.
        """
        return self._creating

    @classmethod
    def from_entity(cls, entity: Entity) -> Self:
        """Open an edit draft pre-filled from *entity*."""
        if not isinstance(entity, cls.entity_model):
            msg = f"{cls.__name__} cannot edit a {type(entity).__name__}"
            raise ValidationError(msg)
        draft = cls.model_validate(entity.model_dump())
        draft._creating = False
        return draft

    def finalize(self, ids: IdGenerator) -> Entity:
        """Validate and build the entity.

        Assigns a fresh id when the draft is new. Raises ``ValidationError``
        listing every missing or malformed field.
        """
        missing = self.missing_fields()
        if missing:
            raise ValidationError(
                f"Missing required {self.kind.value} fields: {', '.join(missing)}",
                [f"{name} is required" for name in missing],
            )
        try:
            entity = self.entity_model.model_validate(self._payload())
        except pydantic.ValidationError as exc:
            errors = _format_pydantic_errors(exc)
            msg = f"Invalid {self.kind.value}: {'; '.join(errors)}"
            raise ValidationError(msg, errors) from exc
        if self.id is None:
            entity = entity.model_copy(update={"id": ids.for_kind(self.kind)})
        return entity

    def _payload(self) -> dict[str, Any]:
        payload = {k: v for k, v in self.values().items() if v is not None}
        # Placeholder until a real id is issued after validation.
        payload.setdefault("id", "new")
        return payload


class ClientDraft(Draft):
    entity_model: ClassVar[type[Entity]] = Client
    required_fields: ClassVar[tuple[str, ...]] = ("name", "email", "phone", "company", "address")

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    address: str | None = None
    created_at: datetime | None = None
    photo: str | None = None

    def set(self, **fields: Any) -> Self:
        if not self.is_new and ({"created_at", "createdAt"} & fields.keys()):
            raise ValidationError(
                "created_at cannot change on an existing client",
                ["created_at: fixed at creation"],
            )
        return super().set(**fields)

    def _payload(self) -> dict[str, Any]:
        payload = super()._payload()
        # Stamped once on creation; edit drafts carry the original value.
        if self.created_at is None:
            payload["created_at"] = datetime.now(UTC)
        return payload


class ProjectDraft(Draft):
    entity_model: ClassVar[type[Entity]] = Project
    required_fields: ClassVar[tuple[str, ...]] = ("name", "description", "start_date", "end_date")

    name: str | None = None
    client_id: str | None = None
    description: str | None = None
    status: ProjectStatus | None = ProjectStatus.ACTIVE
    start_date: date | None = Field(default_factory=date.today)
    end_date: date | None = Field(default_factory=date.today)
    team_member_ids: list[str] = Field(default_factory=list)
    documents: list[str] = Field(default_factory=list)

    def assign_member(self, member_id: str) -> Self:
        """Append a team member id. Duplicates are kept as entered."""
        self.team_member_ids.append(member_id)
        return self


class TeamMemberDraft(Draft):
    entity_model: ClassVar[type[Entity]] = TeamMember
    required_fields: ClassVar[tuple[str, ...]] = ("name", "email", "phone", "position")

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    position: str | None = None
    department: str | None = None
    joined_date: date | None = None
    avatar: str | None = None
    resume: str | None = None

    def _payload(self) -> dict[str, Any]:
        payload = super()._payload()
        payload.setdefault("joined_date", date.today())
        return payload


class InternDraft(Draft):
    entity_model: ClassVar[type[Entity]] = Intern
    required_fields: ClassVar[tuple[str, ...]] = (
        "name",
        "email",
        "phone",
        "university",
        "start_date",
        "end_date",
    )

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    university: str | None = None
    department: str | None = None
    status: InternStatus | None = InternStatus.ONBOARD
    start_date: date | None = Field(default_factory=date.today)
    end_date: date | None = Field(default_factory=date.today)
    resume: str | None = None
    photo: str | None = None


class MilestoneDraft(_FieldBag):
    """Milestone input collected before it is attached to a contract draft.

    ``amount`` defaults to 0, which counts as missing (see
    :func:`opsdash.domain.ledger.add_milestone`).
    """

    required_fields: ClassVar[tuple[str, ...]] = ("title", "description", "due_date", "amount")

    title: str | None = None
    description: str | None = None
    due_date: date | None = Field(default_factory=date.today)
    amount: Decimal | None = Decimal(0)
    attachments: list[str] = Field(default_factory=list)

    def _label(self) -> str:
        return "milestone"

    def missing_fields(self) -> list[str]:
        missing = super().missing_fields()
        # Falsy check: an amount that parses to 0 is treated as not entered.
        if "amount" not in missing:
            try:
                amount = Decimal(str(self.amount).strip())
            except InvalidOperation:
                amount = None
            if amount is not None and not amount:
                missing.append("amount")
        return missing

    def build(self, milestone_id: str) -> ContractMilestone:
        """Validate and build a milestone with *milestone_id*."""
        missing = self.missing_fields()
        if missing:
            raise ValidationError(
                "Please fill in all milestone fields",
                [f"{name} is required" for name in missing],
            )
        payload = {k: v for k, v in self.values().items() if v is not None}
        payload["id"] = milestone_id
        try:
            return ContractMilestone.model_validate(payload)
        except pydantic.ValidationError as exc:
            errors = _format_pydantic_errors(exc)
            raise ValidationError(f"Invalid milestone: {'; '.join(errors)}", errors) from exc


class ContractDraft(Draft):
    """Contract under composition or edit.

    ``total_value`` is a plain editable field until the first milestone
    mutation; from then on the milestone ledger owns it.
    """

    entity_model: ClassVar[type[Entity]] = Contract
    required_fields: ClassVar[tuple[str, ...]] = ("title", "description", "start_date", "end_date")

    title: str | None = None
    client_id: str | None = None
    project_id: str | None = None
    description: str | None = None
    start_date: date | None = Field(default_factory=date.today)
    end_date: date | None = Field(default_factory=date.today)
    total_value: Decimal = Decimal(0)
    milestones: list[ContractMilestone] = Field(default_factory=list)
    documents: list[str] = Field(default_factory=list)

    _ledger_active: bool = PrivateAttr(default=False)

    @classmethod
    def from_entity(cls, entity: Entity) -> Self:
        draft = super().from_entity(entity)
        # An existing contract's total is already derived from its milestones.
        draft._ledger_active = True
        return draft

    def set(self, **fields: Any) -> Self:
        if "milestones" in fields:
            raise ValidationError(
                "milestones change only through add and remove",
                ["milestones: use the milestone ledger"],
            )
        total_keys = {"total_value", "totalValue"} & fields.keys()
        if total_keys and self._ledger_active:
            raise ValidationError(
                "total_value is derived from milestones once the ledger is active",
                ["total_value: derived field"],
            )
        fields = dict(fields)
        for key in total_keys:
            fields[key] = _parse_total(fields[key])
        return super().set(**fields)

    @property
    def ledger_active(self) -> bool:
        """Whether the milestone ledger has taken ownership of ``total_value``."""
        return self._ledger_active

    def activate_ledger(self) -> None:
        self._ledger_active = True

    def milestone_sum(self) -> Decimal:
        return sum((m.amount for m in self.milestones), Decimal(0))

    def _payload(self) -> dict[str, Any]:
        payload = super()._payload()
        # Derived on the contract itself.
        payload.pop("total_value", None)
        return payload


DRAFT_TYPES: dict[EntityKind, type[Draft]] = {
    EntityKind.CLIENT: ClientDraft,
    EntityKind.PROJECT: ProjectDraft,
    EntityKind.TEAM_MEMBER: TeamMemberDraft,
    EntityKind.INTERN: InternDraft,
    EntityKind.CONTRACT: ContractDraft,
}


def new_draft(kind: EntityKind, **fields: Any) -> Draft:
    """Create an empty draft for *kind*, optionally pre-setting *fields*."""
    draft = DRAFT_TYPES[kind]()
    if fields:
        draft.set(**fields)
    return draft
