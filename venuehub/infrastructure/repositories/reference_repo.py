"""Counts records that point at another record (archive and delete guards)."""

from __future__ import annotations

from typing import Any

from venuehub.application.interfaces.repositories import Filter


class ReferenceRepository:
    """Ad-hoc counts over any collection of the document store."""

    def __init__(self, store: Any) -> None:
        self._store = store

    async def count_references(
        self, collection: str, business_id: str | None, filters: list[Filter]
    ) -> int:
        """Count documents matching every filter (and the business, when given)."""
        q = self._store.collection(collection).query()
        if business_id is not None:
            q = q.where("business_id", "==", business_id)
        for field, op, value in filters:
            q = q.where(field, op, value)
        return await q.count()
