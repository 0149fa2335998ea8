"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill.
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar

if TYPE_CHECKING:
    from venuehub.application.dtos.activity import ActivityLogResult
    from venuehub.application.dtos.business import BusinessResult
    from venuehub.application.dtos.common import ArchiveCounts, ListQuery, Page
    from venuehub.application.dtos.permission import PermissionResult
    from venuehub.application.dtos.record import RecordResult
    from venuehub.application.dtos.role import RoleResult
    from venuehub.application.dtos.user import UserResult

T_co = TypeVar("T_co", covariant=True)

# (field, operator, value) as understood by the document store
Filter = tuple[str, str, Any]


class IStoredSnapshot(Protocol):
    """Snapshot returned by the document store (id, data, update time)."""

    id: str
    update_time: str | None

    def to_dict(self) -> dict[str, Any]:
        """Document fields."""


class IArchivableRepository(Protocol[T_co]):
    """Operations the archive lifecycle needs from any archivable collection."""

    resource_type: str

    async def get_snapshot(
        self, record_id: str, business_id: str | None
    ) -> IStoredSnapshot | None:
        """Return the stored document if it exists in the business (None = any business)."""

    def to_result(self, snapshot: IStoredSnapshot) -> T_co:
        """Convert a stored snapshot to the read-model."""

    async def exists_active(
        self,
        field: str,
        value: Any,
        business_id: str | None,
        exclude_id: str | None = None,
    ) -> bool:
        """Return True if a non-archived record other than exclude_id has field == value."""

    async def update_if_unchanged(
        self, snapshot: IStoredSnapshot, changes: dict[str, Any]
    ) -> T_co | None:
        """Apply changes only if the document is unchanged since snapshot; None if it changed."""

    async def archive_counts(self, business_id: str | None) -> ArchiveCounts:
        """Return active and archived counts."""


class IReferenceRepository(Protocol):
    """Counts records that reference another record (dependency checks)."""

    async def count_references(
        self, collection: str, business_id: str | None, filters: list[Filter]
    ) -> int:
        """Count documents in collection matching all filters (tenant-scoped when business_id given)."""


class IPermissionRepository(Protocol):
    """Protocol for the global permission catalog."""

    async def get_by_name(self, name: str) -> PermissionResult | None:
        """Return the catalog entry for name, or None."""

    async def get_many(self, names: list[str]) -> dict[str, PermissionResult]:
        """Return existing entries for the given names, keyed by name."""

    async def list_all(self, active_only: bool = True) -> list[PermissionResult]:
        """Return catalog entries ordered by module and name."""

    async def create(
        self,
        name: str,
        module: str,
        action: str,
        scope: str,
        display_name: str,
        description: str = "",
    ) -> PermissionResult:
        """Create an entry; raises DocumentExistsError-derived conflict when it exists."""


class IRoleRepository(IArchivableRepository["RoleResult"], Protocol):
    """Protocol for tenant-scoped roles."""

    async def get_by_id_and_business(
        self, role_id: str, business_id: str | None
    ) -> RoleResult | None:
        """Return role if it belongs to the business (archived roles included)."""

    async def get_active_by_name(self, business_id: str, name: str) -> RoleResult | None:
        """Return the non-archived role with this name (case-insensitive)."""

    async def list(self, business_id: str, query: ListQuery) -> Page[RoleResult]:
        """Return a page of roles."""

    async def create_role(
        self,
        business_id: str,
        name: str,
        description: str = "",
        permission_ids: list[str] | None = None,
        *,
        is_system: bool = False,
        level: int = 10,
        created_by: str | None = None,
    ) -> RoleResult:
        """Create a role; uniqueness is checked by the caller."""

    async def update_role(self, role_id: str, changes: dict[str, Any]) -> RoleResult:
        """Apply changes (name_lower and permission order kept in step)."""


class IUserRepository(IArchivableRepository["UserResult"], Protocol):
    """Protocol for user accounts."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by ID regardless of business."""

    async def get_by_id_and_business(
        self, user_id: str, business_id: str | None
    ) -> UserResult | None:
        """Return user if it belongs to the business (archived included)."""

    async def get_by_email(self, email: str) -> tuple[UserResult, str] | None:
        """Return the active user with this email and the stored password hash."""

    async def list(self, business_id: str, query: ListQuery) -> Page[UserResult]:
        """Return a page of users."""

    async def create_user(
        self,
        business_id: str | None,
        name: str,
        email: str,
        hashed_password: str,
        *,
        role_id: str | None = None,
        role_type: str = "viewer",
        is_super_admin: bool = False,
        phone: str | None = None,
        invited_by: str | None = None,
    ) -> UserResult:
        """Create a user with an already hashed password."""

    async def update_user(self, user_id: str, changes: dict[str, Any]) -> UserResult:
        """Apply changes (name_lower/email_lower kept in step)."""

    async def delete(self, user_id: str) -> None:
        """Remove the user permanently."""

    async def count_active_owners(self, business_id: str) -> int:
        """Count non-archived owner role-type users in the business."""

    async def touch_last_login(self, user_id: str) -> None:
        """Stamp last_login_at with the current time."""


class IBusinessRepository(IArchivableRepository["BusinessResult"], Protocol):
    """Protocol for businesses (tenants)."""

    async def get_by_id(self, business_id: str) -> BusinessResult | None:
        """Return the business, archived or not."""

    async def create_business(
        self,
        name: str,
        category: str,
        *,
        email: str | None = None,
        phone: str | None = None,
        description: str = "",
    ) -> BusinessResult:
        """Create a business without an owner yet."""

    async def update_business(
        self, business_id: str, changes: dict[str, Any]
    ) -> BusinessResult:
        """Apply changes (name_lower kept in step)."""


class IActivityLogRepository(Protocol):
    """Protocol for activity log persistence."""

    async def add(self, entry: dict[str, Any]) -> None:
        """Store one entry."""

    async def list_for_user(
        self, business_id: str, user_id: str, skip: int = 0, limit: int = 50
    ) -> list[ActivityLogResult]:
        """Return recent entries for a user (newest first)."""


class IRecordRepository(IArchivableRepository["RecordResult"], Protocol):
    """Protocol for generic tenant-scoped archivable records."""

    async def get_by_id_and_business(
        self, record_id: str, business_id: str | None
    ) -> RecordResult | None:
        """Return record if it belongs to the business (archived included)."""

    async def list(self, business_id: str, query: ListQuery) -> Page[RecordResult]:
        """Return a page of records."""

    async def insert(self, data: dict[str, Any], doc_id: str | None = None) -> RecordResult:
        """Create a record with active archive flags and timestamps."""

    async def update_fields(self, record_id: str, changes: dict[str, Any]) -> RecordResult:
        """Merge changes and bump updated_at."""

    async def delete(self, record_id: str) -> None:
        """Remove the record permanently."""

    async def list_between(
        self,
        business_id: str,
        field: str,
        start: Any,
        end: Any,
        statuses: list[str] | None = None,
        limit: int = 100,
    ) -> list[RecordResult]:
        """Active records with start <= field <= end, ordered by field."""
