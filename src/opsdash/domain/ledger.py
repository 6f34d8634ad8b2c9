"""Milestone ledger — keeps a contract draft's total equal to its milestones.

INVARIANT: after any ``add_milestone`` / ``remove_milestone`` completes,
``draft.total_value == sum(m.amount for m in draft.milestones)``.

Updates are additive (the total moves by exactly the milestone amount).
``total_value`` is a free field on a fresh draft; the first ledger
mutation reconciles it to the milestone sum before applying the delta, so
the field is write-once-then-derived.

Milestones are addressed by position. Callers should derive the index from
the draft's current ``milestones`` list right before removing.
"""

from __future__ import annotations

import logging
from typing import cast

from opsdash.domain.drafts import ContractDraft, MilestoneDraft
from opsdash.domain.entities import Contract, ContractMilestone
from opsdash.domain.errors import IndexOutOfRange, ValidationError
from opsdash.domain.ids import IdGenerator

logger = logging.getLogger(__name__)


def _take_ownership(draft: ContractDraft) -> None:
    if not draft.ledger_active:
        draft.total_value = draft.milestone_sum()
        draft.activate_ledger()


def _check_index(draft: ContractDraft, index: int) -> None:
    size = len(draft.milestones)
    if index < 0 or index >= size:
        raise IndexOutOfRange(index, size)


def add_milestone(
    draft: ContractDraft,
    milestone_input: MilestoneDraft,
    ids: IdGenerator,
) -> ContractMilestone:
    """Append a milestone built from *milestone_input* and grow the total.

    Raises ``ValidationError`` when title, description, due date, or amount
    is missing. The amount check is falsy, so 0 is rejected as missing.
    The draft is unchanged on failure.
    """
    milestone = milestone_input.build(ids.milestone_id())
    _take_ownership(draft)
    draft.milestones.append(milestone)
    draft.total_value += milestone.amount
    logger.debug(
        "Milestone %s added (amount=%s, total=%s)",
        milestone.id,
        milestone.amount,
        draft.total_value,
    )
    return milestone


def remove_milestone(draft: ContractDraft, index: int) -> ContractMilestone:
    """Remove the milestone at *index* and shrink the total by its amount.

    Raises ``IndexOutOfRange`` for a position outside the current list
    (negative positions included). Remaining milestones keep their order.
    """
    _check_index(draft, index)
    _take_ownership(draft)
    removed = draft.milestones.pop(index)
    draft.total_value -= removed.amount
    logger.debug(
        "Milestone %s removed from position %d (total=%s)",
        removed.id,
        index,
        draft.total_value,
    )
    return removed


def set_milestone_completed(
    draft: ContractDraft,
    index: int,
    completed: bool = True,
) -> ContractMilestone:
    """Mark the milestone at *index* as completed (or not). The total is unaffected."""
    _check_index(draft, index)
    updated = draft.milestones[index].model_copy(update={"is_completed": completed})
    draft.milestones[index] = updated
    return updated


def finalize_contract(draft: ContractDraft, ids: IdGenerator) -> Contract:
    """Build the contract from *draft*.

    Creating a contract requires at least one milestone; editing an
    existing one does not. Required-field validation follows.
    """
    if draft.is_new and not draft.milestones:
        raise ValidationError(
            "Please add at least one milestone to the contract",
            ["milestones: at least one milestone is required"],
        )
    # ContractDraft.entity_model is Contract.
    return cast(Contract, draft.finalize(ids))
