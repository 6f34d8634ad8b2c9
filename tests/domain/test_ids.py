"""Tests for id generation."""

import random

import pytest

from opsdash.domain.ids import (
    ID_ALPHABET,
    IdGenerator,
    generate_id,
    id_pattern,
    validate_id,
)
from opsdash.domain.types import EntityKind


class TestGenerateId:
    def test_prefix_and_suffix(self) -> None:
        value = generate_id("client")
        assert id_pattern("client").match(value)

    def test_custom_length(self) -> None:
        value = generate_id("x", length=4, rng=random.Random(7))
        assert len(value) == 5
        assert all(ch in ID_ALPHABET for ch in value[1:])

    def test_zero_length_rejected(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            generate_id("client", length=0)


class TestIdGenerator:
    def test_kind_prefixes(self, ids: IdGenerator) -> None:
        assert ids.for_kind(EntityKind.CLIENT).startswith("client")
        assert ids.for_kind(EntityKind.PROJECT).startswith("project")
        assert ids.for_kind(EntityKind.TEAM_MEMBER).startswith("team")
        assert ids.for_kind(EntityKind.INTERN).startswith("intern")
        assert ids.for_kind(EntityKind.CONTRACT).startswith("contract")
        assert ids.milestone_id().startswith("milestone")

    def test_never_repeats_within_process(self) -> None:
        # 36 possible one-character suffixes: every draw after the first
        # few must retry past collisions.
        gen = IdGenerator(length=1, seed=3)
        issued = {gen.next_id("p") for _ in range(len(ID_ALPHABET))}
        assert len(issued) == len(ID_ALPHABET)

    def test_reserved_ids_are_skipped(self) -> None:
        gen = IdGenerator(length=1, seed=5)
        for ch in ID_ALPHABET[:-1]:
            gen.reserve(f"p{ch}")
        assert gen.next_id("p") == f"p{ID_ALPHABET[-1]}"

    def test_seeded_generators_agree(self) -> None:
        a = IdGenerator(seed=42)
        b = IdGenerator(seed=42)
        assert [a.milestone_id() for _ in range(3)] == [b.milestone_id() for _ in range(3)]

    def test_length_property(self) -> None:
        assert IdGenerator(length=12).length == 12


class TestValidateId:
    def test_generated_ids_validate(self, ids: IdGenerator) -> None:
        assert validate_id(ids.for_kind(EntityKind.INTERN), EntityKind.INTERN)

    def test_seeded_ids_do_not(self) -> None:
        assert not validate_id("client1", EntityKind.CLIENT)

    def test_wrong_prefix(self, ids: IdGenerator) -> None:
        assert not validate_id(ids.for_kind(EntityKind.CLIENT), EntityKind.PROJECT)
