"""Error taxonomy for the prize store."""

from __future__ import annotations


class PrizeStoreError(Exception):
    """Base class for every error raised by the prize store."""


class ConnectionFailure(PrizeStoreError):
    """The store pool or collection handle could not be obtained."""


class SeedUnavailable(PrizeStoreError):
    """The seed file is missing, unreadable or not a list of prizes."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Seed data unavailable at {path}: {reason}")


class BatchReplaceUnsupported(PrizeStoreError):
    """A replace was requested for more than one record."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Replace supports exactly one record, got {count}")


class StoreOperationFailed(PrizeStoreError):
    """An insert, replace, count or find call failed at the store.

    The driver error, when there is one, is chained as ``__cause__``.
    """

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation} failed: {detail}")


class PrizeIdMismatch(PrizeStoreError, ValueError):
    """``save_by_id`` was called with an id that disagrees with the prize."""

    def __init__(self, requested_id: int, prize_id: int) -> None:
        self.requested_id = requested_id
        self.prize_id = prize_id
        super().__init__(f"Requested prize {requested_id} but entity carries prizeId {prize_id}")
