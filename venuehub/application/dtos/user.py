"""DTOs for user use cases."""

from dataclasses import dataclass
from datetime import datetime

from venuehub.domain.value_objects import CustomPermissions


@dataclass(frozen=True)
class UserResult:
    """User read-model (never carries the password hash)."""

    id: str
    business_id: str | None
    name: str
    email: str
    role_id: str | None
    role_type: str
    is_super_admin: bool
    is_active: bool
    granted: tuple[str, ...]
    revoked: tuple[str, ...]
    is_archived: bool
    archived_at: datetime | None = None
    archived_by: str | None = None
    phone: str | None = None
    last_login_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def custom_permissions(self) -> CustomPermissions:
        return CustomPermissions.from_lists(self.granted, self.revoked)


@dataclass(frozen=True)
class BulkOutcome:
    """Per-id result of a bulk archive/restore."""

    succeeded: list[str]
    failed: dict[str, str]
