"""Domain value objects for the venuehub application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from venuehub.domain.enums import PermissionAction, PermissionModule, PermissionScope

PERMISSION_NAME_SEP = "."


@dataclass(frozen=True)
class PermissionName:
    """Value object for a permission name ("<module>.<action>.<scope>").

    The name is derived from the (module, action, scope) triple, so two
    permissions with the same triple always share a name.
    """

    module: PermissionModule
    action: PermissionAction
    scope: PermissionScope

    def __post_init__(self) -> None:
        # Accept plain strings and coerce them; ValueError on unknown members.
        object.__setattr__(self, "module", PermissionModule(self.module))
        object.__setattr__(self, "action", PermissionAction(self.action))
        object.__setattr__(self, "scope", PermissionScope(self.scope))

    @classmethod
    def parse(cls, name: str) -> "PermissionName":
        """Parse "events.read.all" into its parts.

        Raises:
            ValueError: If the name does not have three known parts.
        """
        parts = (name or "").split(PERMISSION_NAME_SEP)
        if len(parts) != 3:
            raise ValueError(
                f"Permission name must be '<module>.<action>.<scope>', got {name!r}"
            )
        return cls(*parts)  # type: ignore[arg-type]

    @property
    def value(self) -> str:
        """Canonical string form."""
        return PERMISSION_NAME_SEP.join(
            (self.module.value, self.action.value, self.scope.value)
        )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CustomPermissions:
    """Per-user adjustments on top of the role's permission set.

    granted adds permissions; revoked removes them and always wins.
    """

    granted: frozenset[str] = frozenset()
    revoked: frozenset[str] = frozenset()

    @classmethod
    def from_lists(
        cls,
        granted: Iterable[str] | None = None,
        revoked: Iterable[str] | None = None,
    ) -> "CustomPermissions":
        return cls(frozenset(granted or ()), frozenset(revoked or ()))

    def to_dict(self) -> dict[str, list[str]]:
        """Storage form (sorted lists so documents are stable)."""
        return {"granted": sorted(self.granted), "revoked": sorted(self.revoked)}


def compute_effective_permissions(
    role_permissions: Iterable[str],
    custom: CustomPermissions | None = None,
) -> frozenset[str]:
    """Return (role_permissions ∪ granted) − revoked as a set.

    Duplicates collapse and order is irrelevant, so the result is the same
    for any ordering of the inputs. A permission listed in revoked is never
    present, even if both the role and granted contain it.
    """
    custom = custom or CustomPermissions()
    return (frozenset(role_permissions) | custom.granted) - custom.revoked
