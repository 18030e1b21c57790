"""Chooses insert-one, insert-many or replace-one for a write."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from extralife.core.constants import PRIZE_ID_FIELD
from extralife.core.errors import BatchReplaceUnsupported, StoreOperationFailed
from extralife.repositories.base import PrizeCollection
from extralife.schemas.prizes import Prize
from extralife.services.defaults import generate_storage_key

logger = logging.getLogger(__name__)


class WriteMode(str, Enum):
    INSERT = "insert"
    REPLACE = "replace"


class WriteDispatcher:
    """Issues exactly one store call per write request.

    ==========  =======  =====================
    records     mode     store call
    ==========  =======  =====================
    0           any      none
    1           INSERT   ``insert_one``
    1           REPLACE  ``replace_one`` by prizeId
    2+          INSERT   ``insert_many``
    2+          REPLACE  BatchReplaceUnsupported
    ==========  =======  =====================

    Store errors are not retried.
    """

    def __init__(self, collection: PrizeCollection) -> None:
        self.collection = collection

    def write(self, records: Sequence[Prize], mode: WriteMode = WriteMode.INSERT) -> None:
        if mode is WriteMode.REPLACE and len(records) > 1:
            raise BatchReplaceUnsupported(len(records))
        if not records:
            logger.debug("Nothing to write")
            return

        for record in records:
            if not record.has_storage_key:
                record.storage_key = generate_storage_key()
        documents = [record.to_document() for record in records]

        if mode is WriteMode.REPLACE:
            prize_id = records[0].prize_id
            replaced = self.collection.replace_one({PRIZE_ID_FIELD: prize_id}, documents[0])
            if replaced != 1:
                raise StoreOperationFailed("replace_one", f"no document with prizeId {prize_id}")
            logger.info("Replaced prize %d", prize_id)
        elif len(documents) == 1:
            self.collection.insert_one(documents[0])
            logger.info("Inserted prize %d", records[0].prize_id)
        else:
            self.collection.insert_many(documents)
            logger.info("Inserted %d prizes", len(documents))
