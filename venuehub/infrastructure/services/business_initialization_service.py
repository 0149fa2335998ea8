"""Business RBAC initialization: default permission catalog and seeded roles."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypedDict

from venuehub.application.dtos.role import RoleResult
from venuehub.application.interfaces.repositories import IPermissionRepository
from venuehub.domain.entities.role import OWNER_ROLE_NAME
from venuehub.domain.enums import PermissionAction, PermissionModule, PermissionScope
from venuehub.domain.value_objects import PermissionName


class PermissionData(TypedDict):
    """Catalog entry seed."""

    name: str
    display_name: str
    description: str


class RoleData(TypedDict):
    """Role configuration for default roles."""

    name: str
    description: str
    level: int
    grants: Callable[[PermissionName], bool]


def _build_default_permissions() -> list[PermissionData]:
    entries: list[PermissionData] = []
    for module in PermissionModule:
        for action in PermissionAction:
            name = PermissionName(module, action, PermissionScope.ALL)
            label = module.value.replace("_", " ")
            entries.append(
                {
                    "name": name.value,
                    "display_name": f"{action.value.capitalize()} {label}",
                    "description": f"{action.value.capitalize()} all {label} records",
                }
            )
    return entries


DEFAULT_PERMISSIONS: list[PermissionData] = _build_default_permissions()

DEFAULT_ROLES: list[RoleData] = [
    {
        "name": OWNER_ROLE_NAME,
        "description": "Full access to all features",
        "level": 100,
        "grants": lambda p: True,
    },
    {
        "name": "Manager",
        "description": "Can manage events, clients, and day-to-day operations",
        "level": 75,
        "grants": lambda p: p.action
        not in (PermissionAction.MANAGE, PermissionAction.DELETE),
    },
    {
        "name": "Staff",
        "description": "Can view and create basic records",
        "level": 50,
        "grants": lambda p: p.action in (PermissionAction.READ, PermissionAction.CREATE)
        or p.module == PermissionModule.TASKS,
    },
    {
        "name": "Viewer",
        "description": "Read-only access",
        "level": 25,
        "grants": lambda p: p.action == PermissionAction.READ,
    },
]


class BusinessInitializationService:
    """Seeds the default roles of a new business from the active catalog."""

    def __init__(self, role_repo: Any, permission_repo: IPermissionRepository) -> None:
        self.role_repo = role_repo
        self.permission_repo = permission_repo

    async def initialize_business_roles(
        self, business_id: str, created_by: str | None = None
    ) -> dict[str, RoleResult]:
        """Create Owner, Manager, Staff, and Viewer. Returns roles keyed by name."""
        catalog = await self.permission_repo.list_all(active_only=True)
        parsed = [PermissionName.parse(p.name) for p in catalog]
        roles: dict[str, RoleResult] = {}
        for role_data in DEFAULT_ROLES:
            permission_ids = [p.value for p in parsed if role_data["grants"](p)]
            roles[role_data["name"]] = await self.role_repo.create_role(
                business_id,
                role_data["name"],
                role_data["description"],
                permission_ids,
                is_system=True,
                level=role_data["level"],
                created_by=created_by,
            )
        return roles
