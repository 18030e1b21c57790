"""Creation-timestamp normalization."""

from __future__ import annotations

from datetime import UTC, datetime

from extralife.core.constants import FUTURE_DATE_TOLERANCE
from extralife.schemas.prizes import as_utc


def utc_now() -> datetime:
    return datetime.now(UTC)


def normalize(candidate: datetime | None, now: datetime) -> datetime:
    """Pick the effective ``date_added`` for a record being saved.

    The caller's value wins only when it lies more than
    ``FUTURE_DATE_TOLERANCE`` after *now*; otherwise the record is
    stamped with *now*. Both values are compared and returned in UTC.
    """
    now = as_utc(now)
    if candidate is None:
        return now
    candidate = as_utc(candidate)
    if candidate - now > FUTURE_DATE_TOLERANCE:
        return candidate
    return now
