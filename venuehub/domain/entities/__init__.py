"""Domain entities (business rules, persistence-independent)."""

from venuehub.domain.entities.archivable import ARCHIVE_FIELDS, ArchiveState
from venuehub.domain.entities.permission import PermissionEntity
from venuehub.domain.entities.reminder import ReminderEntity
from venuehub.domain.entities.role import OWNER_ROLE_NAME, RoleEntity
from venuehub.domain.entities.user import UserEntity

__all__ = [
    "ARCHIVE_FIELDS",
    "ArchiveState",
    "OWNER_ROLE_NAME",
    "PermissionEntity",
    "ReminderEntity",
    "RoleEntity",
    "UserEntity",
]
