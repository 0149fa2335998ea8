"""Permission resolver: effective permission set of a user.

effective = (role permissions ∪ granted) − revoked. Super-admins bypass the
set entirely in has_permission; their effective set is the active catalog.
"""

from __future__ import annotations

from venuehub.application.dtos.user import UserResult
from venuehub.application.interfaces.repositories import (
    IPermissionRepository,
    IRoleRepository,
)
from venuehub.domain.value_objects import compute_effective_permissions


class PermissionResolver:
    """Resolves permissions from the user's role and custom grants/revocations."""

    def __init__(
        self,
        role_repo: IRoleRepository,
        permission_repo: IPermissionRepository,
    ) -> None:
        self._role_repo = role_repo
        self._permission_repo = permission_repo

    async def _role_permissions(self, user: UserResult) -> frozenset[str]:
        if not user.role_id:
            return frozenset()
        role = await self._role_repo.get_by_id_and_business(user.role_id, user.business_id)
        if role is None or role.is_archived:
            return frozenset()
        return frozenset(role.permission_ids)

    async def resolve_effective_permissions(self, user: UserResult) -> frozenset[str]:
        """Return the user's effective permission names (order-free, deduplicated)."""
        if user.is_super_admin:
            catalog = await self._permission_repo.list_all(active_only=True)
            return frozenset(p.name for p in catalog)
        return compute_effective_permissions(
            await self._role_permissions(user), user.custom_permissions
        )

    async def has_permission(
        self,
        user: UserResult,
        name: str,
        effective: frozenset[str] | None = None,
    ) -> bool:
        """Return True if the user holds the named permission.

        Super-admins hold every name, including names missing from the
        catalog. For everyone else an unknown or inactive name is never held.

        Args:
            user: The acting user.
            name: Permission name ("<module>.<action>.<scope>").
            effective: Precomputed effective set (skips resolution).
        """
        if user.is_super_admin:
            return True
        permission = await self._permission_repo.get_by_name(name)
        if permission is None or not permission.is_active:
            return False
        if effective is None:
            effective = await self.resolve_effective_permissions(user)
        return name in effective
