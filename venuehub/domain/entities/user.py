"""User domain entity: archive and deletion guards."""

from dataclasses import dataclass, field

from venuehub.domain.entities.archivable import ArchiveState
from venuehub.domain.enums import RoleType
from venuehub.domain.exceptions import BusinessRuleException


@dataclass
class UserEntity:
    """Domain entity for a user account (rules that involve the user itself)."""

    id: str
    business_id: str | None
    email: str
    role_type: RoleType = RoleType.VIEWER
    is_super_admin: bool = False
    is_active: bool = True
    archive: ArchiveState = field(default_factory=ArchiveState)

    def ensure_can_be_archived(self, actor_id: str, active_owner_count: int) -> None:
        """Reject self-archive and archiving the last active owner.

        Args:
            actor_id: User performing the archive.
            active_owner_count: Non-archived owners in the business, this user included.

        Raises:
            BusinessRuleException: If either rule is violated.
        """
        if actor_id == self.id:
            raise BusinessRuleException(
                "You cannot archive your own account", rule="self_archive"
            )
        if self.role_type == RoleType.OWNER and active_owner_count <= 1:
            raise BusinessRuleException(
                "Cannot archive the only owner of the business", rule="sole_owner"
            )

    def ensure_can_be_deleted(self, business_owner_id: str | None) -> None:
        """Permanent deletion is only for archived, non-owner accounts.

        Raises:
            BusinessRuleException: If the user is active or owns the business.
        """
        if not self.archive.is_archived:
            raise BusinessRuleException(
                "User must be archived before permanent deletion",
                rule="delete_requires_archive",
            )
        if self.id == business_owner_id or self.role_type == RoleType.OWNER:
            raise BusinessRuleException(
                "The business owner cannot be deleted", rule="owner_delete"
            )
