"""Shared pytest fixtures and test configuration."""

from __future__ import annotations

import copy
import json
import os
import sys
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import oracledb
import pytest

# Ensure src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from extralife.core.errors import StoreOperationFailed  # noqa: E402

FIXED_NOW = datetime(2017, 11, 4, 12, 0, tzinfo=UTC)


# ── In-memory collection ─────────────────────────────────────────────


class InMemoryCollection:
    """Dict-backed stand-in for a SODA document collection.

    Records every call in ``calls`` as ``(operation, payload)``. With
    ``unique_prize_id`` set, inserting a duplicate ``prizeId`` fails the
    whole call, like a unique index would.
    """

    def __init__(self, unique_prize_id: bool = False) -> None:
        self.documents: list[dict[str, Any]] = []
        self.calls: list[tuple[str, Any]] = []
        self.unique_prize_id = unique_prize_id
        self.fail_on: dict[str, Exception] = {}

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise self.fail_on[operation]

    @staticmethod
    def _matches(doc: dict[str, Any], filters: dict[str, Any] | None) -> bool:
        return all(doc.get(k) == v for k, v in (filters or {}).items())

    def _check_unique(self, incoming: Sequence[dict[str, Any]]) -> None:
        if not self.unique_prize_id:
            return
        seen = {d.get("prizeId") for d in self.documents}
        for doc in incoming:
            if doc.get("prizeId") in seen:
                raise StoreOperationFailed("insert", f"duplicate prizeId {doc.get('prizeId')}")
            seen.add(doc.get("prizeId"))

    def insert_one(self, document: dict[str, Any]) -> None:
        self.calls.append(("insert_one", document))
        self._check("insert_one")
        self._check_unique([document])
        self.documents.append(copy.deepcopy(document))

    def insert_many(self, documents: Sequence[dict[str, Any]]) -> None:
        self.calls.append(("insert_many", list(documents)))
        self._check("insert_many")
        self._check_unique(documents)
        self.documents.extend(copy.deepcopy(list(documents)))

    def replace_one(self, filters: dict[str, Any], document: dict[str, Any]) -> int:
        self.calls.append(("replace_one", (filters, document)))
        self._check("replace_one")
        for i, doc in enumerate(self.documents):
            if self._matches(doc, filters):
                self.documents[i] = copy.deepcopy(document)
                return 1
        return 0

    def count(self, filters: dict[str, Any] | None = None) -> int:
        self.calls.append(("count", filters))
        self._check("count")
        return sum(1 for d in self.documents if self._matches(d, filters))

    def find_all(self, filters: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        self.calls.append(("find_all", filters))
        self._check("find_all")
        return [copy.deepcopy(d) for d in self.documents if self._matches(d, filters)]

    def write_calls(self) -> list[str]:
        return [op for op, _ in self.calls if op in ("insert_one", "insert_many", "replace_one")]


@pytest.fixture
def collection() -> InMemoryCollection:
    return InMemoryCollection()


@pytest.fixture
def write_seed(tmp_path: Path):  # type: ignore[no-untyped-def]
    """Write a seed file and return its path."""

    def _write(records: Any, name: str = "prizes.json") -> Path:
        path = tmp_path / name
        path.write_text(records if isinstance(records, str) else json.dumps(records))
        return path

    return _write


@pytest.fixture
def empty_seed(write_seed) -> Path:  # type: ignore[no-untyped-def]
    return write_seed([])


@pytest.fixture
def clock():  # type: ignore[no-untyped-def]
    return lambda: FIXED_NOW


# ── Mock SODA pool ───────────────────────────────────────────────────


class MockSodaConnection:
    """Mock Oracle connection exposing a SODA database."""

    def __init__(self, soda_collection: MagicMock) -> None:
        self.soda_collection = soda_collection
        self.soda_database = MagicMock(spec=oracledb.SodaDatabase)
        self.soda_database.openCollection.return_value = soda_collection
        self.soda_database.createCollection.return_value = soda_collection
        self._committed = False
        self._closed = False
        self.call_timeout = 0

    def getSodaDatabase(self) -> MagicMock:  # noqa: N802
        return self.soda_database

    def commit(self) -> None:
        self._committed = True

    def close(self) -> None:
        self._closed = True


class MockSodaPool:
    """Mock Oracle connection pool handing out one SODA connection.

    The collection and its ``find()`` operation are spec'd on the
    python-oracledb SODA classes, and ``replaceOne`` fails like the driver
    does when no ``key()`` was set on the operation.
    """

    def __init__(self) -> None:
        self.operation = MagicMock(spec=oracledb.SodaOperation)
        self.operation.filter.return_value = self.operation
        self.operation.key.return_value = self.operation
        self.operation.getOne.return_value = None
        self.operation.replaceOne.side_effect = self._replace_one
        self.soda_collection = MagicMock(spec=oracledb.SodaCollection)
        self.soda_collection.find.return_value = self.operation
        self._connection = MockSodaConnection(self.soda_collection)

    def _replace_one(self, document: dict[str, Any]) -> bool:
        if not self.operation.key.called:
            raise oracledb.DatabaseError("DPI-1050: key must be set before replaceOne")
        return True

    def acquire(self) -> MockSodaConnection:
        return self._connection

    def close(self, force: bool = False) -> None:
        pass


@pytest.fixture
def soda_pool() -> MockSodaPool:
    return MockSodaPool()


def soda_document(content: dict[str, Any], key: str = "") -> MagicMock:
    doc = MagicMock(spec=oracledb.SodaDocument)
    doc.getContent.return_value = content
    doc.key = key
    return doc


def set_soda_documents(pool: MockSodaPool, contents: list[dict[str, Any]]) -> None:
    """Configure the mock collection's ``find()`` to return *contents*."""
    docs = [soda_document(content, key=f"K{i}") for i, content in enumerate(contents, start=1)]
    pool.operation.getDocuments.return_value = docs
    pool.operation.getOne.return_value = soda_document(contents[0], key="K1") if contents else None
    pool.operation.count.return_value = len(contents)
