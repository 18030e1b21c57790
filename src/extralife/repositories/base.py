"""Document collection access over Oracle SODA."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any, Protocol, TypeVar

import oracledb

from extralife.core.constants import PRIZE_ID_FIELD, PRIZE_ID_INDEX_NAME, SLOW_CALL_THRESHOLD_MS
from extralife.core.errors import StoreOperationFailed

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ORA-00955: name is already used by an existing object
_ORA_NAME_IN_USE = 955


class PrizeCollection(Protocol):
    """The store operations the prize repository relies on."""

    def insert_one(self, document: dict[str, Any]) -> None: ...

    def insert_many(self, documents: Sequence[dict[str, Any]]) -> None: ...

    def replace_one(self, filters: dict[str, Any], document: dict[str, Any]) -> int: ...

    def count(self, filters: dict[str, Any] | None = None) -> int: ...

    def find_all(self, filters: dict[str, Any] | None = None) -> list[dict[str, Any]]: ...


class DocumentCollection:
    """A named SODA collection reached through a connection pool.

    Every call acquires its own connection, commits on success and
    releases the connection. Driver errors surface as
    :class:`StoreOperationFailed` with the original error chained.
    """

    def __init__(
        self,
        pool: Any,
        collection_name: str,
        call_timeout_ms: int = 0,
    ) -> None:
        self.pool = pool
        self.collection_name = collection_name
        self.call_timeout_ms = call_timeout_ms

    # ── helpers ──────────────────────────────────────────────────────

    def _acquire(self) -> Any:
        """Acquire a connection from the pool."""
        conn = self.pool.acquire()
        if self.call_timeout_ms:
            conn.call_timeout = self.call_timeout_ms
        return conn

    def _log_call(self, operation: str, elapsed_ms: float) -> None:
        """Log call timing; warn if above slow-call threshold."""
        if elapsed_ms > SLOW_CALL_THRESHOLD_MS:
            logger.warning(
                "SLOW STORE CALL (%.1fms): %s on %s",
                elapsed_ms,
                operation,
                self.collection_name,
            )
        else:
            logger.debug("Store call (%.1fms): %s on %s", elapsed_ms, operation, self.collection_name)

    def _run(self, operation: str, call: Callable[[Any], T]) -> T:
        conn = self._acquire()
        try:
            collection = conn.getSodaDatabase().openCollection(self.collection_name)
            if collection is None:
                raise StoreOperationFailed(operation, f"collection {self.collection_name} does not exist")
            start = time.perf_counter()
            result = call(collection)
            conn.commit()
            self._log_call(operation, (time.perf_counter() - start) * 1000)
            return result
        except oracledb.Error as exc:
            raise StoreOperationFailed(operation, str(exc)) from exc
        finally:
            conn.close()

    @staticmethod
    def _query(collection: Any, filters: dict[str, Any] | None) -> Any:
        operation = collection.find()
        if filters:
            operation = operation.filter(filters)
        return operation

    # ── read ─────────────────────────────────────────────────────────

    def find_all(self, filters: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """Return the content of every document matching *filters*."""
        return self._run(
            "find_all",
            lambda coll: [doc.getContent() for doc in self._query(coll, filters).getDocuments()],
        )

    def count(self, filters: dict[str, Any] | None = None) -> int:
        """Return document count, optionally filtered."""
        return int(self._run("count", lambda coll: self._query(coll, filters).count()))

    # ── write ────────────────────────────────────────────────────────

    def insert_one(self, document: dict[str, Any]) -> None:
        self._run("insert_one", lambda coll: coll.insertOne(document))

    def insert_many(self, documents: Sequence[dict[str, Any]]) -> None:
        self._run("insert_many", lambda coll: coll.insertMany(list(documents)))

    def replace_one(self, filters: dict[str, Any], document: dict[str, Any]) -> int:
        """Replace the first document matching *filters*. Returns documents replaced.

        SODA only replaces by key, so the match is looked up first on the
        same connection.
        """

        def lookup_and_replace(coll: Any) -> bool:
            found = coll.find().filter(filters).getOne()
            if found is None:
                return False
            return coll.find().key(found.key).replaceOne(document)

        replaced = self._run("replace_one", lookup_and_replace)
        return 1 if replaced else 0

    # ── indexes ──────────────────────────────────────────────────────

    def ensure_unique_prize_id(self) -> None:
        """Create the unique ``prizeId`` index unless it already exists."""
        spec = {
            "name": PRIZE_ID_INDEX_NAME,
            "unique": True,
            "fields": [{"path": PRIZE_ID_FIELD, "datatype": "number"}],
        }
        try:
            self._run("create_index", lambda coll: coll.createIndex(spec))
        except StoreOperationFailed as exc:
            cause = exc.__cause__
            error = cause.args[0] if cause is not None and cause.args else None
            if getattr(error, "code", None) != _ORA_NAME_IN_USE:
                raise
            logger.debug("Index %s already present on %s", PRIZE_ID_INDEX_NAME, self.collection_name)
            return
        logger.info("Created unique index %s on %s", PRIZE_ID_INDEX_NAME, self.collection_name)
