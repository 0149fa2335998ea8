"""Activity log repository (append-only)."""

from __future__ import annotations

from typing import Any

from venuehub.application.dtos.activity import ActivityLogResult
from venuehub.core.constants import COLLECTION_ACTIVITY_LOGS
from venuehub.shared.utils.datetime import utc_now
from venuehub.shared.utils.generators import generate_cuid


class ActivityLogRepository:
    """Stores and reads activity entries."""

    def __init__(self, store: Any) -> None:
        self._coll = store.collection(COLLECTION_ACTIVITY_LOGS)

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> ActivityLogResult:
        return ActivityLogResult(
            id=doc_id,
            business_id=data.get("business_id"),
            user_id=data.get("user_id"),
            action=data.get("action", ""),
            resource_type=data.get("resource_type", ""),
            resource_id=data.get("resource_id"),
            details=data.get("details", ""),
            metadata=data.get("metadata") or {},
            ip_address=data.get("ip_address"),
            timestamp=data.get("timestamp"),
        )

    async def add(self, entry: dict[str, Any]) -> None:
        await self._coll.create(generate_cuid(), {**entry, "timestamp": utc_now()})

    async def list_for_user(
        self, business_id: str, user_id: str, skip: int = 0, limit: int = 50
    ) -> list[ActivityLogResult]:
        q = (
            self._coll.where("business_id", "==", business_id)
            .where("user_id", "==", user_id)
            .order_by("timestamp", "DESCENDING")
            .offset(skip)
            .limit(limit)
        )
        return [self._to_result(s.id, s.to_dict()) async for s in q.stream()]
