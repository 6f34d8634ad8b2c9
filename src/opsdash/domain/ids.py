"""Identity generation and id patterns.

Ids are ``{prefix}{suffix}`` where the suffix is a fixed-length run of
pseudo-random base36 characters. Uniqueness is only guaranteed within one
process: an :class:`IdGenerator` remembers what it issued and draws again
on collision. There is no cryptographic or cross-process guarantee.

INVARIANT: Ids are permanent. Once assigned, an id never changes.
"""

from __future__ import annotations

import random
import re
import string

from opsdash.domain.types import EntityKind

ID_ALPHABET = string.ascii_lowercase + string.digits
DEFAULT_SUFFIX_LENGTH = 9

MILESTONE_PREFIX = "milestone"

TYPE_PREFIXES: dict[EntityKind, str] = {
    EntityKind.CLIENT: "client",
    EntityKind.PROJECT: "project",
    EntityKind.TEAM_MEMBER: "team",
    EntityKind.INTERN: "intern",
    EntityKind.CONTRACT: "contract",
}


def generate_id(
    prefix: str,
    *,
    length: int = DEFAULT_SUFFIX_LENGTH,
    rng: random.Random | None = None,
) -> str:
    """Return *prefix* followed by *length* random ``[a-z0-9]`` characters.

    Stateless: callers that need in-process uniqueness should go through
    :class:`IdGenerator`.
    """
    if length < 1:
        msg = f"Suffix length must be positive, got {length}"
        raise ValueError(msg)
    chooser = rng or random
    return prefix + "".join(chooser.choices(ID_ALPHABET, k=length))


class IdGenerator:
    """Collision-checked id source for one process lifetime.

    Args:
        length: Suffix length for every id issued.
        seed: Optional seed for a private ``random.Random`` (tests).
    """

    def __init__(self, *, length: int = DEFAULT_SUFFIX_LENGTH, seed: int | None = None) -> None:
        self._length = length
        self._rng = random.Random(seed)
        self._issued: set[str] = set()

    @property
    def length(self) -> int:
        return self._length

    def reserve(self, existing_id: str) -> None:
        """Mark an externally supplied id (e.g. seed data) as taken."""
        self._issued.add(existing_id)

    def next_id(self, prefix: str) -> str:
        """Issue a new id with *prefix* that this generator never issued before."""
        while True:
            candidate = generate_id(prefix, length=self._length, rng=self._rng)
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate

    def for_kind(self, kind: EntityKind) -> str:
        """Issue a new id using the prefix registered for *kind*."""
        return self.next_id(TYPE_PREFIXES[kind])

    def milestone_id(self) -> str:
        return self.next_id(MILESTONE_PREFIX)


def id_pattern(prefix: str, length: int = DEFAULT_SUFFIX_LENGTH) -> re.Pattern[str]:
    """Compiled pattern matching ids generated for *prefix*."""
    return re.compile(rf"^{re.escape(prefix)}[a-z0-9]{{{length}}}$")


def validate_id(entity_id: str, kind: EntityKind, length: int = DEFAULT_SUFFIX_LENGTH) -> bool:
    """Check whether *entity_id* looks like a generated id for *kind*.

    Seeded ids such as ``client1`` do not match; this is a format check for
    generated ids only, never an existence check.
    """
    return id_pattern(TYPE_PREFIXES[kind], length).match(entity_id) is not None
