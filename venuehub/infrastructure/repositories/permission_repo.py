"""Permission catalog repository (global collection, document ID = permission name)."""

from __future__ import annotations

from typing import Any

from venuehub.application.dtos.permission import PermissionResult
from venuehub.core.constants import COLLECTION_PERMISSIONS
from venuehub.shared.utils.datetime import utc_now


class PermissionRepository:
    """Catalog storage. Using the name as document ID makes name (and triple) uniqueness atomic."""

    def __init__(self, store: Any) -> None:
        self._coll = store.collection(COLLECTION_PERMISSIONS)

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> PermissionResult:
        return PermissionResult(
            id=doc_id,
            name=data.get("name", doc_id),
            module=data.get("module", ""),
            action=data.get("action", ""),
            scope=data.get("scope", ""),
            display_name=data.get("display_name", doc_id),
            description=data.get("description", ""),
            is_active=data.get("is_active", True),
        )

    async def get_by_name(self, name: str) -> PermissionResult | None:
        """Return catalog entry by name, or None."""
        if not name:
            return None
        snapshot = await self._coll.document(name).get()
        if snapshot is None:
            return None
        return self._to_result(snapshot.id, snapshot.to_dict())

    async def get_many(self, names: list[str]) -> dict[str, PermissionResult]:
        """Return the entries that exist among names, keyed by name."""
        found: dict[str, PermissionResult] = {}
        for name in dict.fromkeys(names):
            permission = await self.get_by_name(name)
            if permission is not None:
                found[name] = permission
        return found

    async def list_all(self, active_only: bool = True) -> list[PermissionResult]:
        """Return catalog entries ordered by module, then name."""
        q = self._coll.query()
        if active_only:
            q = q.where("is_active", "==", True)
        q = q.order_by("module").order_by("name")
        return [self._to_result(s.id, s.to_dict()) async for s in q.stream()]

    async def create(
        self,
        name: str,
        module: str,
        action: str,
        scope: str,
        display_name: str,
        description: str = "",
    ) -> PermissionResult:
        """Create an entry. Raises DocumentExistsError when the name is taken."""
        now = utc_now()
        data = {
            "name": name,
            "module": module,
            "action": action,
            "scope": scope,
            "display_name": display_name,
            "description": description,
            "is_active": True,
            "created_at": now,
            "updated_at": now,
        }
        await self._coll.create(name, data)
        return self._to_result(name, data)
