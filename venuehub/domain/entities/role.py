"""Role domain entity.

Tenant-scoped named bundle of permissions. Seeded (system) roles have
extra protection: they cannot be renamed, and the Owner role cannot be
changed at all.
"""

from dataclasses import dataclass, field

from venuehub.domain.exceptions import BusinessRuleException, ValidationException

OWNER_ROLE_NAME = "Owner"


@dataclass
class RoleEntity:
    """Domain entity for a role (business rules only, no persistence)."""

    id: str
    business_id: str
    name: str
    description: str = ""
    permission_ids: frozenset[str] = field(default_factory=frozenset)
    is_system: bool = False
    level: int = 10

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate role business rules. Raises ValidationException if invalid."""
        if not self.name or not self.name.strip():
            raise ValidationException("Role name is required", field="name")
        if not 0 <= self.level <= 100:
            raise ValidationException("Role level must be between 0 and 100", field="level")

    @property
    def is_owner_role(self) -> bool:
        return self.is_system and self.name == OWNER_ROLE_NAME

    def ensure_can_update(self, new_name: str | None) -> None:
        """Check an update against the system-role rules.

        Raises:
            BusinessRuleException: Owner role modified, or system role renamed.
        """
        if self.is_owner_role:
            raise BusinessRuleException(
                "The Owner role cannot be modified", rule="owner_role_immutable"
            )
        if self.is_system and new_name is not None and new_name != self.name:
            raise BusinessRuleException(
                "System roles cannot be renamed", rule="system_role_rename"
            )

    def ensure_can_archive(self) -> None:
        """The Owner role must always exist for the business owner."""
        if self.is_owner_role:
            raise BusinessRuleException(
                "The Owner role cannot be archived", rule="owner_role_immutable"
            )
