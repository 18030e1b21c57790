"""Domain constants for the prize store."""

from __future__ import annotations

from datetime import timedelta

# ── Collection ──────────────────────────────────────────────────────
DEFAULT_PRIZE_COLLECTION = "ExtraLife2017Prizes"
PRIZE_ID_INDEX_NAME = "PRIZE_ID_UK"

# ── Document keys ───────────────────────────────────────────────────
STORAGE_KEY_FIELD = "storageKey"
PRIZE_ID_FIELD = "prizeId"
DATE_ADDED_FIELD = "dateAdded"
DATE_TO_DISPLAY_FIELD = "dateToDisplay"

# ── Identifiers ─────────────────────────────────────────────────────
FIRST_PRIZE_ID = 1
UNSET_PRIZE_ID = 0

# Storage keys that count as "not assigned yet"
EMPTY_STORAGE_KEYS: frozenset[str] = frozenset(
    {
        "",
        "00000000-0000-0000-0000-000000000000",
        "0" * 32,
    }
)

# ── Timestamps ──────────────────────────────────────────────────────
# A caller-supplied dateAdded is kept only when it is further in the
# future than this; anything closer is replaced by the save time.
FUTURE_DATE_TOLERANCE = timedelta(minutes=5)

# ── Store calls ─────────────────────────────────────────────────────
SLOW_CALL_THRESHOLD_MS = 100
