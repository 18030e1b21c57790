"""Prize repository — seeding, id assignment and writes for prizes."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime

from extralife.core.errors import PrizeIdMismatch, StoreOperationFailed
from extralife.repositories.base import PrizeCollection
from extralife.repositories.write_dispatcher import WriteDispatcher, WriteMode
from extralife.schemas.prizes import Prize
from extralife.services.defaults import fill_defaults
from extralife.services.identifiers import assign_sequential_ids, next_id
from extralife.services.seed_loader import SeedLoader
from extralife.services.timestamps import normalize, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Found:
    """The replaced prize, wrapped like every other save result."""

    prizes: list[Prize]


@dataclass(frozen=True)
class NotFound:
    """No stored prize carries ``prize_id``; nothing was written."""

    prize_id: int


SaveResult = Found | NotFound


class PrizeRepository:
    """Reads and writes prizes in a single document collection.

    Reads seed the collection first when it is empty. Writes read the
    whole collection to compute the next ``prize_id``; the unique index
    on ``prizeId`` (see ``DocumentCollection.ensure_unique_prize_id``)
    turns a concurrent duplicate into a ``StoreOperationFailed``.
    """

    def __init__(
        self,
        collection: PrizeCollection,
        seed_loader: SeedLoader,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.collection = collection
        self.seed_loader = seed_loader
        self.clock = clock
        self.dispatcher = WriteDispatcher(collection)

    # ── read ─────────────────────────────────────────────────────────

    def create_default(self) -> list[Prize]:
        """Return a new, unsaved prize with only ``date_added`` set."""
        return [Prize(date_added=self.clock())]

    def retrieve_all(self) -> list[Prize]:
        """Return every stored prize, seeding an empty collection first."""
        self.ensure_seeded()
        return [Prize.from_document(doc) for doc in self.collection.find_all({})]

    def count(self) -> int:
        """Return the number of stored prizes, without seeding."""
        return self.collection.count({})

    # ── write ────────────────────────────────────────────────────────

    def save_one(self, prize: Prize) -> list[Prize]:
        """Insert *prize* as a new record and return it in a list."""
        existing = self.retrieve_all()
        now = self.clock()

        fill_defaults([prize], now)
        prize.prize_id = next_id(existing)
        prize.date_added = normalize(prize.date_added, now)

        saved = [prize]
        self.dispatcher.write(saved, WriteMode.INSERT)
        return saved

    def save_by_id(self, prize_id: int, prize: Prize) -> SaveResult:
        """Replace the stored prize with ``prize_id`` by *prize*.

        Returns ``NotFound`` without writing when no stored prize has
        that id.
        """
        if prize_id != prize.prize_id:
            raise PrizeIdMismatch(prize_id, prize.prize_id)

        existing = self.retrieve_all()
        current = next((p for p in existing if p.prize_id == prize.prize_id), None)
        if current is None:
            logger.info("Prize %d not found; nothing replaced", prize.prize_id)
            return NotFound(prize.prize_id)

        if not prize.has_storage_key:
            prize.storage_key = current.storage_key

        saved = [prize]
        self.dispatcher.write(saved, WriteMode.REPLACE)
        return Found(saved)

    def save_many(self, prizes: Sequence[Prize]) -> list[Prize]:
        """Insert *prizes* as new records, numbered after the stored maximum."""
        existing = self.retrieve_all()
        now = self.clock()

        fill_defaults(prizes, now)
        assign_sequential_ids(prizes, existing)
        for prize in prizes:
            prize.date_added = normalize(prize.date_added, now)

        self.dispatcher.write(prizes, WriteMode.INSERT)
        return list(prizes)

    # ── seeding ──────────────────────────────────────────────────────

    def ensure_seeded(self) -> None:
        """Insert the seed prizes if the collection is empty.

        The count and the insert are separate store calls. When the
        insert fails and the collection is no longer empty, another
        caller seeded it first and the failure is dropped.
        """
        if self.count() > 0:
            return

        seed = self.seed_loader.load()
        fill_defaults(seed, self.clock())
        try:
            self.dispatcher.write(seed, WriteMode.INSERT)
        except StoreOperationFailed:
            if self.count() == 0:
                raise
            logger.warning("Collection was seeded concurrently; keeping existing prizes")
            return
        logger.info("Seeded %d prizes", len(seed))
