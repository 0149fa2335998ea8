"""DTOs for business (tenant) use cases."""

from dataclasses import dataclass
from datetime import datetime

from venuehub.application.dtos.user import UserResult


@dataclass(frozen=True)
class BusinessResult:
    """Business read-model."""

    id: str
    name: str
    category: str
    owner_id: str | None
    email: str | None
    phone: str | None
    description: str
    is_active: bool
    is_archived: bool
    archived_at: datetime | None = None
    archived_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of registering a business with its owner."""

    business: BusinessResult
    owner: UserResult
    access_token: str
