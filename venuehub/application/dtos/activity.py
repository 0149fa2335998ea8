"""DTOs for the activity log."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ActivityLogResult:
    """One activity log entry."""

    id: str
    business_id: str | None
    user_id: str | None
    action: str
    resource_type: str
    resource_id: str | None
    details: str
    metadata: dict[str, Any] = field(default_factory=dict)
    ip_address: str | None = None
    timestamp: datetime | None = None
