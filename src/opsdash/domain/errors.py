"""Domain error taxonomy.

Services convert these into ``ServiceError`` payloads via ``code``.
Deleting or upserting an unknown id is deliberately *not* an error.
"""

from __future__ import annotations


class OpsdashError(Exception):
    """Base class for recoverable domain errors."""

    code = "OPSDASH_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(OpsdashError):
    """A required field is missing or malformed.

    Attributes:
        errors: One human-readable line per problem found.
    """

    code = "VALIDATION_FAILED"

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors if errors is not None else [message]


class IndexOutOfRange(OpsdashError, IndexError):
    """A milestone position does not exist in the current milestone list."""

    code = "INDEX_OUT_OF_RANGE"

    def __init__(self, index: int, size: int) -> None:
        if size:
            message = f"Milestone index {index} out of range (0..{size - 1})"
        else:
            message = f"Milestone index {index} out of range (no milestones)"
        super().__init__(message)
        self.index = index
        self.size = size
