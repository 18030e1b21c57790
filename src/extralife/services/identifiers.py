"""Prize identifier assignment."""

from __future__ import annotations

from collections.abc import Sequence

from extralife.core.constants import FIRST_PRIZE_ID
from extralife.schemas.prizes import Prize


def next_id(existing: Sequence[Prize]) -> int:
    """Return one past the highest ``prize_id`` in *existing*.

    An empty collection starts numbering at 1.
    """
    if not existing:
        return FIRST_PRIZE_ID
    return max(p.prize_id for p in existing) + 1


def assign_sequential_ids(batch: Sequence[Prize], existing: Sequence[Prize]) -> None:
    """Number *batch* in order, continuing after the highest stored id.

    Ids already present on the batch are overwritten; callers never
    choose ``prize_id`` for new records.
    """
    start = next_id(existing)
    for offset, prize in enumerate(batch):
        prize.prize_id = start + offset
