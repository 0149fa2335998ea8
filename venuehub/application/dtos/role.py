"""DTOs for role use cases (no dependency on storage)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class RoleResult:
    """Role read-model."""

    id: str
    business_id: str
    name: str
    description: str
    permission_ids: tuple[str, ...]
    is_system: bool
    level: int
    is_archived: bool
    archived_at: datetime | None
    archived_by: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None
