"""Generic repository for tenant-scoped archivable records.

One class serves partners, reminders, supplies, finance records, contracts,
and invoices; each instance is bound to one collection.
"""

from __future__ import annotations

from typing import Any

from venuehub.application.dtos.record import RecordResult
from venuehub.infrastructure.repositories.base import DocumentRepository

_META_FIELDS = frozenset(
    {
        "business_id",
        "is_archived",
        "archived_at",
        "archived_by",
        "created_by",
        "created_at",
        "updated_at",
    }
)


class RecordRepository(DocumentRepository[RecordResult]):
    """Archivable records of one collection; domain fields are returned in data."""

    def __init__(
        self,
        store: Any,
        collection_name: str,
        resource_type: str,
        search_field: str | None = None,
    ) -> None:
        self.collection_name = collection_name
        self.resource_type = resource_type
        self.search_field = search_field
        super().__init__(store)

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> RecordResult:
        return RecordResult(
            id=doc_id,
            business_id=data.get("business_id", ""),
            data={
                k: v
                for k, v in data.items()
                if k not in _META_FIELDS and not k.endswith("_lower")
            },
            is_archived=data.get("is_archived", False),
            archived_at=data.get("archived_at"),
            archived_by=data.get("archived_by"),
            created_by=data.get("created_by"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    async def list_between(
        self,
        business_id: str,
        field: str,
        start: Any,
        end: Any,
        statuses: list[str] | None = None,
        limit: int = 100,
    ) -> list[RecordResult]:
        """Active records with start <= field <= end, ordered by field."""
        q = (
            self._coll.where(self.tenant_field, "==", business_id)
            .where("is_archived", "==", False)
            .where(field, ">=", start)
            .where(field, "<=", end)
        )
        if statuses:
            q = q.where("status", "in", statuses)
        q = q.order_by(field).limit(limit)
        return [self.to_result(s) async for s in q.stream()]
