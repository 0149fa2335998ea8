"""In-process document store with the same API as the Firestore REST client.

Used when DATABASE_BACKEND=memory (local development and tests). Documents
are deep-copied on the way in and out so callers never share state with the
store. Writes go through one asyncio.Lock, which makes conditional updates
(last_update_time) atomic with respect to each other.
"""

from __future__ import annotations

import asyncio
import copy
import itertools
from collections.abc import AsyncIterator
from typing import Any

from venuehub.infrastructure.exceptions import (
    DocumentExistsError,
    PreconditionFailedError,
)

_MISSING = object()


def _compare(op: str, actual: Any, expected: Any) -> bool:
    if op == "==":
        return actual == expected
    if op == "!=":
        return actual is not None and actual != expected
    if op == "in":
        return actual in expected
    if op == "not-in":
        return actual is not None and actual not in expected
    if op in ("array_contains", "array-contains"):
        return isinstance(actual, list) and expected in actual
    if op in ("array_contains_any", "array-contains-any"):
        return isinstance(actual, list) and any(v in actual for v in expected)
    if actual is None or expected is None:
        return False
    try:
        if op == "<":
            return actual < expected
        if op == "<=":
            return actual <= expected
        if op == ">":
            return actual > expected
        if op == ">=":
            return actual >= expected
    except TypeError:
        return False
    raise ValueError(f"Unsupported filter operator: {op!r}")


def _sort_key(value: Any) -> tuple[int, Any]:
    # Nulls sort first, as in Firestore.
    return (0, "") if value is None else (1, value)


class MemoryDocumentSnapshot:
    """Snapshot of a stored document (id + data + update time)."""

    def __init__(self, id_: str, data: dict, update_time: str | None = None):
        self.id = id_
        self._data = data
        self.update_time = update_time

    def to_dict(self) -> dict:
        return self._data


class MemoryDocumentReference:
    """Reference to a single document in a memory collection."""

    def __init__(self, collection: MemoryCollection, document_id: str):
        self._collection = collection
        self.id = document_id

    async def set(self, data: dict[str, Any]) -> None:
        """Create or overwrite the document."""
        async with self._collection._store._lock:
            self._collection._write(self.id, copy.deepcopy(data))

    async def get(self) -> MemoryDocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        return self._collection._snapshot(self.id)

    async def update(
        self,
        data: dict[str, Any],
        *,
        last_update_time: str | None = None,
    ) -> MemoryDocumentSnapshot:
        """Merge fields into an existing document, optionally only if unchanged.

        Raises:
            PreconditionFailedError: Document missing or changed since last_update_time.
        """
        async with self._collection._store._lock:
            current = self._collection._docs.get(self.id)
            if current is None:
                raise PreconditionFailedError("Document does not exist")
            stored_data, stored_time = current
            if last_update_time is not None and stored_time != last_update_time:
                raise PreconditionFailedError("Document changed since it was read")
            merged = {**stored_data, **copy.deepcopy(data)}
            self._collection._write(self.id, merged)
        snapshot = self._collection._snapshot(self.id)
        assert snapshot is not None
        return snapshot

    async def delete(self) -> None:
        """Delete the document (no-op when missing)."""
        async with self._collection._store._lock:
            self._collection._docs.pop(self.id, None)


class MemoryQuery:
    """Fluent query over a memory collection (AND of all filters)."""

    def __init__(self, collection: MemoryCollection):
        self._collection = collection
        self._filters: list[tuple[str, str, Any]] = []
        self._orders: list[tuple[str, str]] = []
        self._offset = 0
        self._limit: int | None = None

    def where(self, field: str, op: str, value: Any) -> MemoryQuery:
        self._filters.append((field, op, value))
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> MemoryQuery:
        self._orders.append((field, direction))
        return self

    def offset(self, n: int) -> MemoryQuery:
        self._offset = n
        return self

    def limit(self, n: int) -> MemoryQuery:
        self._limit = n
        return self

    def _matches(self, data: dict[str, Any]) -> bool:
        for field, op, expected in self._filters:
            actual = data.get(field, _MISSING)
            if actual is _MISSING or not _compare(op, actual, expected):
                return False
        return True

    def _run(self) -> list[MemoryDocumentSnapshot]:
        rows = [
            (doc_id, data)
            for doc_id, (data, _) in self._collection._docs.items()
            if self._matches(data)
        ]
        for field, direction in reversed(self._orders):
            rows = [r for r in rows if field in r[1]]
            rows.sort(
                key=lambda r, f=field: _sort_key(r[1].get(f)),
                reverse=direction == "DESCENDING",
            )
        if self._offset:
            rows = rows[self._offset :]
        if self._limit is not None:
            rows = rows[: self._limit]
        return [
            snapshot
            for snapshot in (self._collection._snapshot(doc_id) for doc_id, _ in rows)
            if snapshot is not None
        ]

    async def stream(self) -> AsyncIterator[MemoryDocumentSnapshot]:
        """Yield matching document snapshots."""
        for snapshot in self._run():
            yield snapshot

    async def count(self) -> int:
        """Count matching documents (ignores offset/limit)."""
        return sum(
            1 for data, _ in self._collection._docs.values() if self._matches(data)
        )


class MemoryCollection:
    """Collection of documents keyed by ID."""

    def __init__(self, store: MemoryDocumentStore, name: str):
        self._store = store
        self.name = name
        self._docs: dict[str, tuple[dict[str, Any], str]] = {}

    def _write(self, document_id: str, data: dict[str, Any]) -> None:
        self._docs[document_id] = (data, self._store._next_update_time())

    def _snapshot(self, document_id: str) -> MemoryDocumentSnapshot | None:
        current = self._docs.get(document_id)
        if current is None:
            return None
        data, update_time = current
        return MemoryDocumentSnapshot(document_id, copy.deepcopy(data), update_time)

    def document(self, document_id: str) -> MemoryDocumentReference:
        return MemoryDocumentReference(self, document_id)

    async def create(self, document_id: str, data: dict[str, Any]) -> None:
        """Create a document with the given ID (DocumentExistsError if it exists)."""
        async with self._store._lock:
            if document_id in self._docs:
                raise DocumentExistsError("Document already exists")
            self._write(document_id, copy.deepcopy(data))

    def query(self) -> MemoryQuery:
        return MemoryQuery(self)

    def where(self, field: str, op: str, value: Any) -> MemoryQuery:
        return self.query().where(field, op, value)

    async def stream(self) -> AsyncIterator[MemoryDocumentSnapshot]:
        async for snapshot in self.query().stream():
            yield snapshot


class MemoryDocumentStore:
    """Document store kept in process memory."""

    def __init__(self) -> None:
        self._collections: dict[str, MemoryCollection] = {}
        self._lock = asyncio.Lock()
        self._clock = itertools.count(1)

    def _next_update_time(self) -> str:
        return f"{next(self._clock):020d}"

    def collection(self, collection_id: str) -> MemoryCollection:
        if collection_id not in self._collections:
            self._collections[collection_id] = MemoryCollection(self, collection_id)
        return self._collections[collection_id]

    async def aclose(self) -> None:
        """Nothing to release; present for parity with the Firestore client."""
        return None
