"""Role repository (tenant-scoped, archivable)."""

from __future__ import annotations

from typing import Any

from venuehub.application.dtos.role import RoleResult
from venuehub.core.constants import COLLECTION_ROLES
from venuehub.infrastructure.repositories.base import DocumentRepository
from venuehub.shared.utils.text import normalize_key


class RoleRepository(DocumentRepository[RoleResult]):
    """Roles of a business. name_lower backs case-insensitive uniqueness and search."""

    collection_name = COLLECTION_ROLES
    resource_type = "role"
    search_field = "name_lower"
    default_order = ("level", "DESCENDING")

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> RoleResult:
        return RoleResult(
            id=doc_id,
            business_id=data.get("business_id", ""),
            name=data.get("name", ""),
            description=data.get("description") or "",
            permission_ids=tuple(data.get("permission_ids") or ()),
            is_system=data.get("is_system", False),
            level=data.get("level", 10),
            is_archived=data.get("is_archived", False),
            archived_at=data.get("archived_at"),
            archived_by=data.get("archived_by"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    async def create_role(
        self,
        business_id: str,
        name: str,
        description: str = "",
        permission_ids: list[str] | None = None,
        *,
        is_system: bool = False,
        level: int = 10,
        created_by: str | None = None,
    ) -> RoleResult:
        """Create role; uniqueness must be checked by the caller."""
        return await self.insert(
            {
                "business_id": business_id,
                "name": name.strip(),
                "name_lower": normalize_key(name),
                "description": description,
                "permission_ids": sorted(set(permission_ids or ())),
                "is_system": is_system,
                "level": level,
                "created_by": created_by,
            }
        )

    async def update_role(self, role_id: str, changes: dict[str, Any]) -> RoleResult:
        """Apply changes; keeps name_lower and sorted permission_ids in step."""
        payload = dict(changes)
        if "name" in payload:
            payload["name"] = payload["name"].strip()
            payload["name_lower"] = normalize_key(payload["name"])
        if "permission_ids" in payload:
            payload["permission_ids"] = sorted(set(payload["permission_ids"]))
        return await self.update_fields(role_id, payload)

    async def get_active_by_name(self, business_id: str, name: str) -> RoleResult | None:
        """Return the non-archived role with this name (case-insensitive)."""
        q = (
            self._coll.where("business_id", "==", business_id)
            .where("name_lower", "==", normalize_key(name))
            .where("is_archived", "==", False)
            .limit(1)
        )
        async for snapshot in q.stream():
            return self.to_result(snapshot)
        return None
