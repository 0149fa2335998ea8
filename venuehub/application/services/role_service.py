"""Role application service: tenant roles and their permission sets."""

from __future__ import annotations

import logging
from typing import Any

from venuehub.application.dtos.common import ListQuery, Page
from venuehub.application.dtos.role import RoleResult
from venuehub.application.interfaces.repositories import IPermissionRepository, IRoleRepository
from venuehub.application.interfaces.services import IActivityLogger
from venuehub.application.services.archive_policy import ROLE_POLICY
from venuehub.application.services.archive_service import ArchiveService
from venuehub.application.services.authorization_service import AuthorizationService
from venuehub.domain.entities.role import RoleEntity
from venuehub.domain.exceptions import (
    BusinessRuleException,
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from venuehub.shared.enums import ActivityAction

logger = logging.getLogger(__name__)


def _to_entity(role: RoleResult) -> RoleEntity:
    return RoleEntity(
        id=role.id,
        business_id=role.business_id,
        name=role.name,
        description=role.description,
        permission_ids=frozenset(role.permission_ids),
        is_system=role.is_system,
        level=role.level,
    )


class RoleService:
    """Create, update, archive, and restore roles of a business."""

    def __init__(
        self,
        role_repo: IRoleRepository,
        permission_repo: IPermissionRepository,
        archive_service: ArchiveService,
        authorization: AuthorizationService | None = None,
        activity_logger: IActivityLogger | None = None,
    ) -> None:
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._archive = archive_service
        self._authorization = authorization
        self._activity = activity_logger

    async def _validate_permissions(self, permission_ids: list[str]) -> list[str]:
        """Return deduplicated ids; ValidationException if any is not in the catalog."""
        unique_ids = list(dict.fromkeys(permission_ids))
        found = await self._permission_repo.get_many(unique_ids)
        missing = [p for p in unique_ids if p not in found]
        if missing:
            raise ValidationException(
                f"Unknown permissions: {', '.join(missing)}", field="permission_ids"
            )
        return unique_ids

    async def _ensure_name_free(
        self, business_id: str, name: str, exclude_id: str | None = None
    ) -> None:
        existing = await self._role_repo.get_active_by_name(business_id, name)
        if existing is not None and existing.id != exclude_id:
            raise ConflictException("role", "name", name)

    async def _invalidate(self, business_id: str) -> None:
        if self._authorization is not None:
            await self._authorization.invalidate_business(business_id)

    async def _log(
        self, business_id: str, actor_id: str, action: ActivityAction, role_id: str
    ) -> None:
        if self._activity is not None:
            await self._activity.log(
                business_id, actor_id, action, "role", role_id, details=f"role {action.value}"
            )

    async def list_roles(self, business_id: str, query: ListQuery) -> Page[RoleResult]:
        return await self._role_repo.list(business_id, query)

    async def get_role(self, business_id: str, role_id: str) -> RoleResult:
        role = await self._role_repo.get_by_id_and_business(role_id, business_id)
        if role is None:
            raise ResourceNotFoundException("role", role_id)
        return role

    async def create_role(
        self,
        business_id: str,
        actor_id: str,
        name: str,
        description: str = "",
        permission_ids: list[str] | None = None,
        level: int = 10,
    ) -> RoleResult:
        """Create a custom role.

        Raises:
            ValidationException: Blank name, bad level, or unknown permission.
            ConflictException: An active role of the business has this name.
        """
        RoleEntity(id="", business_id=business_id, name=name, level=level)  # validates
        await self._ensure_name_free(business_id, name)
        ids = await self._validate_permissions(permission_ids or [])
        created = await self._role_repo.create_role(
            business_id,
            name,
            description,
            ids,
            level=level,
            created_by=actor_id,
        )
        logger.info("Role created: %s (%s) in %s", created.name, created.id, business_id)
        await self._log(business_id, actor_id, ActivityAction.CREATED, created.id)
        return created

    async def update_role(
        self,
        business_id: str,
        role_id: str,
        actor_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        permission_ids: list[str] | None = None,
        level: int | None = None,
    ) -> RoleResult:
        """Update a role; permission_ids replaces the whole set.

        Raises:
            ResourceNotFoundException: Missing or in another business.
            BusinessRuleException: Archived role, Owner role, or system role rename.
            ConflictException: New name taken by an active role.
            ValidationException: Unknown permission.
        """
        role = await self.get_role(business_id, role_id)
        if role.is_archived:
            raise BusinessRuleException(
                "Cannot update an archived role", rule="archived_readonly"
            )
        entity = _to_entity(role)
        entity.ensure_can_update(name)
        changes: dict[str, Any] = {}
        if name is not None and name.strip() != role.name:
            if not name.strip():
                raise ValidationException("Role name is required", field="name")
            await self._ensure_name_free(business_id, name, exclude_id=role_id)
            changes["name"] = name
        if description is not None:
            changes["description"] = description
        if level is not None:
            entity.level = level
            entity.validate()
            changes["level"] = level
        if permission_ids is not None:
            changes["permission_ids"] = await self._validate_permissions(permission_ids)
        if not changes:
            return role
        updated = await self._role_repo.update_role(role_id, changes)
        if "permission_ids" in changes:
            await self._invalidate(business_id)
        await self._log(business_id, actor_id, ActivityAction.UPDATED, role_id)
        return updated

    async def archive_role(self, business_id: str, role_id: str, actor_id: str) -> RoleResult:
        """Archive a role (never the Owner role; blocked while users hold it when enabled)."""
        role = await self.get_role(business_id, role_id)
        _to_entity(role).ensure_can_archive()
        archived = await self._archive.archive(
            ROLE_POLICY, self._role_repo, role_id, business_id, actor_id
        )
        await self._invalidate(business_id)
        return archived

    async def restore_role(self, business_id: str, role_id: str, actor_id: str) -> RoleResult:
        """Restore a role; fails with ConflictException if its name is taken again."""
        restored = await self._archive.restore(
            ROLE_POLICY, self._role_repo, role_id, business_id, actor_id
        )
        await self._invalidate(business_id)
        return restored
