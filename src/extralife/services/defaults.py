"""Default values for prizes about to be written."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import datetime

from extralife.schemas.prizes import Prize


def generate_storage_key() -> str:
    """Generate a new storage key (UUID hex)."""
    return uuid.uuid4().hex


def fill_defaults(prizes: Sequence[Prize], now: datetime) -> None:
    """Fill unset fields in place, in list order.

    - ``storage_key``: a fresh UUID
    - ``prize_id``: position in the list, starting at 1
    - ``date_to_display`` / ``date_added``: *now*
    """
    for index, prize in enumerate(prizes):
        if not prize.has_storage_key:
            prize.storage_key = generate_storage_key()
        if not prize.has_prize_id:
            prize.prize_id = index + 1
        if prize.date_to_display is None:
            prize.date_to_display = now
        if prize.date_added is None:
            prize.date_added = now
