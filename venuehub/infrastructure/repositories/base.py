"""Base repository over the document store.

Tenant scoping, archive-aware listing, uniqueness probes, and conditional
updates live here; subclasses only map documents to read-models. Works with
both the Firestore REST client and the in-memory store.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from venuehub.application.dtos.common import ArchiveCounts, ListQuery, Page
from venuehub.infrastructure.exceptions import PreconditionFailedError
from venuehub.shared.utils.datetime import utc_now
from venuehub.shared.utils.generators import generate_cuid

T = TypeVar("T")

# Highest BMP private-use code point; prefix <= x < prefix + _PREFIX_END is a prefix match.
_PREFIX_END = "\uf8ff"


class DocumentRepository(Generic[T]):
    """Shared persistence logic for one collection.

    Subclasses set collection_name and resource_type and implement _to_result.
    search_field, when set, is a normalized (lowercase) field used for prefix search.
    """

    collection_name: str = ""
    resource_type: str = ""
    tenant_field: str = "business_id"
    search_field: str | None = None
    default_order: tuple[str, str] = ("created_at", "DESCENDING")

    def __init__(self, store: Any) -> None:
        self._store = store
        self._coll = store.collection(self.collection_name)

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> T:
        raise NotImplementedError

    def to_result(self, snapshot: Any) -> T:
        return self._to_result(snapshot.id, snapshot.to_dict())

    def _in_business(self, data: dict[str, Any], business_id: str | None) -> bool:
        return business_id is None or data.get(self.tenant_field) == business_id

    async def get_snapshot(self, record_id: str, business_id: str | None) -> Any | None:
        """Return the stored snapshot; None if missing or in another business."""
        if not record_id:
            return None
        snapshot = await self._coll.document(record_id).get()
        if snapshot is None or not self._in_business(snapshot.to_dict(), business_id):
            return None
        return snapshot

    async def get_by_id(self, record_id: str) -> T | None:
        """Return record by ID regardless of business."""
        snapshot = await self.get_snapshot(record_id, None)
        return self.to_result(snapshot) if snapshot else None

    async def get_by_id_and_business(
        self, record_id: str, business_id: str | None
    ) -> T | None:
        """Return record if it belongs to the business (archived included)."""
        snapshot = await self.get_snapshot(record_id, business_id)
        return self.to_result(snapshot) if snapshot else None

    def _base_query(self, business_id: str | None, query: ListQuery) -> Any:
        q = self._coll.query()
        if business_id is not None:
            q = q.where(self.tenant_field, "==", business_id)
        if query.archived_only:
            q = q.where("is_archived", "==", True)
        elif not query.include_archived:
            q = q.where("is_archived", "==", False)
        for field, value in query.filters.items():
            if value is None:
                continue
            op = "in" if isinstance(value, (list, tuple)) else "=="
            q = q.where(field, op, list(value) if op == "in" else value)
        if query.search and self.search_field:
            prefix = query.search.strip().lower()
            if prefix:
                q = q.where(self.search_field, ">=", prefix)
                q = q.where(self.search_field, "<", prefix + _PREFIX_END)
        return q

    async def list(self, business_id: str | None, query: ListQuery) -> Page[T]:
        """Return one page of records plus the total matching count."""
        total = await self._base_query(business_id, query).count()
        q = self._base_query(business_id, query)
        if query.search and self.search_field:
            # Range filters require the first ordering on the same field.
            q = q.order_by(self.search_field)
        elif query.order_by:
            q = q.order_by(
                query.order_by, "DESCENDING" if query.descending else "ASCENDING"
            )
        else:
            q = q.order_by(*self.default_order)
        q = q.offset(query.skip).limit(query.limit)
        items = [self.to_result(s) async for s in q.stream()]
        return Page(items=items, total=total, skip=query.skip, limit=query.limit)

    async def exists_active(
        self,
        field: str,
        value: Any,
        business_id: str | None,
        exclude_id: str | None = None,
    ) -> bool:
        """Return True if another non-archived record has field == value."""
        if value is None:
            return False
        q = self._coll.where(field, "==", value).where("is_archived", "==", False)
        if business_id is not None:
            q = q.where(self.tenant_field, "==", business_id)
        async for snapshot in q.limit(2).stream():
            if snapshot.id != exclude_id:
                return True
        return False

    async def archive_counts(self, business_id: str | None) -> ArchiveCounts:
        active = await self._base_query(business_id, ListQuery()).count()
        archived = await self._base_query(
            business_id, ListQuery(archived_only=True)
        ).count()
        return ArchiveCounts(active=active, archived=archived)

    async def insert(self, data: dict[str, Any], doc_id: str | None = None) -> T:
        """Create a document (new CUID unless doc_id given) with timestamps and active flags."""
        now = utc_now()
        record_id = doc_id or generate_cuid()
        payload = {
            "is_archived": False,
            "archived_at": None,
            "archived_by": None,
            **data,
            "created_at": now,
            "updated_at": now,
        }
        await self._coll.create(record_id, payload)
        return self._to_result(record_id, payload)

    async def update_fields(self, record_id: str, changes: dict[str, Any]) -> T:
        """Merge changes into the document and bump updated_at."""
        snapshot = await self._coll.document(record_id).update(
            {**changes, "updated_at": utc_now()}
        )
        return self.to_result(snapshot)

    async def update_if_unchanged(self, snapshot: Any, changes: dict[str, Any]) -> T | None:
        """Merge changes only if the document still matches snapshot; None if it changed."""
        try:
            updated = await self._coll.document(snapshot.id).update(
                {**changes, "updated_at": utc_now()},
                last_update_time=snapshot.update_time,
            )
        except PreconditionFailedError:
            return None
        return self.to_result(updated)

    async def delete(self, record_id: str) -> None:
        await self._coll.document(record_id).delete()
