"""DTOs for the permission catalog."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionResult:
    """Permission read-model. id and name are the same value."""

    id: str
    name: str
    module: str
    action: str
    scope: str
    display_name: str
    description: str
    is_active: bool


@dataclass(frozen=True)
class PermissionGroup:
    """Catalog entries of one module."""

    module: str
    permissions: list[PermissionResult]
