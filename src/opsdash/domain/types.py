"""Entity kinds, status enums, and dashboard sections.

Search precedence and the kind → section mapping live here so the search
coordinator and the view state machine agree on a single ordering.
"""

from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    """The five independently tracked entity collections."""

    CLIENT = "client"
    PROJECT = "project"
    TEAM_MEMBER = "team_member"
    INTERN = "intern"
    CONTRACT = "contract"


class ProjectStatus(StrEnum):
    """Project status tabs."""

    ACTIVE = "Active"
    WORKING = "Working"
    CLOSED = "Closed"


class InternStatus(StrEnum):
    """Intern status tabs."""

    ONBOARD = "Onboard"
    POSTPONED = "Postponed"


class Section(StrEnum):
    """Dashboard sections (view/focus states)."""

    OVERVIEW = "overview"
    CLIENTS = "clients"
    PROJECTS = "projects"
    TEAM = "team"
    INTERNS = "interns"
    CALENDAR = "calendar"
    CONTRACTS = "contracts"


# Fixed order in which search results compete for focus.
SEARCH_PRECEDENCE: tuple[EntityKind, ...] = (
    EntityKind.CLIENT,
    EntityKind.PROJECT,
    EntityKind.TEAM_MEMBER,
    EntityKind.INTERN,
    EntityKind.CONTRACT,
)

KIND_SECTIONS: dict[EntityKind, Section] = {
    EntityKind.CLIENT: Section.CLIENTS,
    EntityKind.PROJECT: Section.PROJECTS,
    EntityKind.TEAM_MEMBER: Section.TEAM,
    EntityKind.INTERN: Section.INTERNS,
    EntityKind.CONTRACT: Section.CONTRACTS,
}

SECTION_KINDS: dict[Section, EntityKind] = {v: k for k, v in KIND_SECTIONS.items()}

KIND_LABELS: dict[EntityKind, str] = {
    EntityKind.CLIENT: "Client",
    EntityKind.PROJECT: "Project",
    EntityKind.TEAM_MEMBER: "Team member",
    EntityKind.INTERN: "Intern",
    EntityKind.CONTRACT: "Contract",
}

DEPARTMENTS: tuple[str, ...] = (
    "Engineering",
    "Design",
    "Management",
    "Marketing",
    "Sales",
    "Support",
)


def parse_kind(value: str) -> EntityKind:
    """Resolve a kind from its value or its section name.

    Accepts ``"client"`` as well as ``"clients"``, and ``"team"`` for team
    members. Raises ``ValueError`` for anything else.
    """
    text = value.strip().lower().replace("-", "_")
    try:
        return EntityKind(text)
    except ValueError:
        pass
    try:
        return SECTION_KINDS[Section(text)]
    except (ValueError, KeyError):
        valid = ", ".join(s.value for s in KIND_SECTIONS.values())
        msg = f"Unknown entity kind: {value!r} (expected one of: {valid})"
        raise ValueError(msg) from None
