"""Tests for entity kinds, sections, and search precedence."""

import pytest

from opsdash.domain.types import (
    KIND_SECTIONS,
    SEARCH_PRECEDENCE,
    SECTION_KINDS,
    EntityKind,
    Section,
    parse_kind,
)


class TestSearchPrecedence:
    def test_fixed_order(self) -> None:
        assert SEARCH_PRECEDENCE == (
            EntityKind.CLIENT,
            EntityKind.PROJECT,
            EntityKind.TEAM_MEMBER,
            EntityKind.INTERN,
            EntityKind.CONTRACT,
        )

    def test_every_kind_has_a_section(self) -> None:
        assert set(KIND_SECTIONS) == set(EntityKind)
        assert SECTION_KINDS[Section.TEAM] is EntityKind.TEAM_MEMBER

    def test_overview_and_calendar_hold_no_kind(self) -> None:
        assert Section.OVERVIEW not in SECTION_KINDS
        assert Section.CALENDAR not in SECTION_KINDS


class TestParseKind:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("client", EntityKind.CLIENT),
            ("clients", EntityKind.CLIENT),
            ("Projects", EntityKind.PROJECT),
            ("team", EntityKind.TEAM_MEMBER),
            ("team-member", EntityKind.TEAM_MEMBER),
            ("interns", EntityKind.INTERN),
            ("contract", EntityKind.CONTRACT),
        ],
    )
    def test_accepts_kind_and_section_names(self, text: str, expected: EntityKind) -> None:
        assert parse_kind(text) is expected

    @pytest.mark.parametrize("text", ["calendar", "overview", "invoices", ""])
    def test_rejects_others(self, text: str) -> None:
        with pytest.raises(ValueError, match="Unknown entity kind"):
            parse_kind(text)
