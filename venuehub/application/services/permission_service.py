"""Permission application service: the global catalog."""

from __future__ import annotations

import logging
from itertools import groupby
from typing import Any

from venuehub.application.dtos.permission import PermissionGroup, PermissionResult
from venuehub.application.interfaces.repositories import IPermissionRepository
from venuehub.domain.entities.permission import PermissionEntity
from venuehub.domain.exceptions import ConflictException

logger = logging.getLogger(__name__)


class PermissionService:
    """List, create, and seed catalog entries."""

    def __init__(
        self,
        permission_repo: IPermissionRepository,
        duplicate_errors: tuple[type[Exception], ...] = (),
    ) -> None:
        """Initialize the service.

        Args:
            permission_repo: Catalog storage.
            duplicate_errors: Storage errors meaning "this name already exists".
        """
        self._repo = permission_repo
        self._duplicate_errors = duplicate_errors

    async def list_catalog(self, active_only: bool = True) -> list[PermissionGroup]:
        """Return catalog entries grouped by module (modules in name order)."""
        permissions = await self._repo.list_all(active_only=active_only)
        ordered = sorted(permissions, key=lambda p: (p.module, p.name))
        return [
            PermissionGroup(module=module, permissions=list(items))
            for module, items in groupby(ordered, key=lambda p: p.module)
        ]

    async def create_permission(
        self,
        module: str,
        action: str,
        scope: str,
        display_name: str,
        description: str = "",
    ) -> PermissionResult:
        """Create a catalog entry named "<module>.<action>.<scope>".

        Raises:
            ValidationException: Unknown module/action/scope or blank display name.
            ConflictException: The triple (and so the name) already exists.
        """
        entity = PermissionEntity(
            name=f"{module}.{action}.{scope}",
            module=module,
            action=action,
            scope=scope,
            display_name=display_name,
            description=description,
        )
        # The name is the document ID, so a concurrent duplicate fails in storage too.
        if await self._repo.get_by_name(entity.name) is not None:
            raise ConflictException("permission", "name", entity.name)
        try:
            created = await self._repo.create(
                entity.name,
                entity.module,
                entity.action,
                entity.scope,
                entity.display_name,
                entity.description,
            )
        except self._duplicate_errors as e:
            raise ConflictException("permission", "name", entity.name) from e
        logger.info("Permission created: %s", created.name)
        return created

    async def ensure_catalog(self, entries: list[dict[str, Any]]) -> int:
        """Create missing catalog entries; existing ones are left untouched.

        Args:
            entries: Dicts with name, display_name, description.

        Returns:
            Number of entries created.
        """
        created = 0
        for entry in entries:
            entity = PermissionEntity.from_name(
                entry["name"], entry["display_name"], entry.get("description", "")
            )
            if await self._repo.get_by_name(entity.name) is not None:
                continue
            try:
                await self._repo.create(
                    entity.name,
                    entity.module,
                    entity.action,
                    entity.scope,
                    entity.display_name,
                    entity.description,
                )
            except self._duplicate_errors:
                continue
            created += 1
        if created:
            logger.info("Permission catalog seeded: %s new entries", created)
        return created
