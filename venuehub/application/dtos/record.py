"""DTOs for generic archivable records (partners, supplies, finance, ...)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class RecordResult:
    """Archivable record read-model; domain fields live in data."""

    id: str
    business_id: str
    data: dict[str, Any] = field(default_factory=dict)
    is_archived: bool = False
    archived_at: datetime | None = None
    archived_by: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
