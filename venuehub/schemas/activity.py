"""Activity log API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ActivityLogResponse(BaseModel):
    """One activity log entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    business_id: str | None
    user_id: str | None
    action: str
    resource_type: str
    resource_id: str | None
    details: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    ip_address: str | None = None
    timestamp: datetime | None = None
