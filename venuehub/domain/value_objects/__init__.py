"""Domain value objects (immutable, self-validating)."""

from venuehub.domain.value_objects.core import (
    CustomPermissions,
    PermissionName,
    compute_effective_permissions,
)

__all__ = [
    "CustomPermissions",
    "PermissionName",
    "compute_effective_permissions",
]
