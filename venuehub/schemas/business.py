"""Business (tenant) API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from venuehub.domain.enums import BusinessCategory


class BusinessUpdate(BaseModel):
    """Request body for PUT /businesses/current (all fields optional)."""

    model_config = ConfigDict(use_enum_values=True)

    name: str | None = Field(default=None, min_length=1, max_length=200)
    category: BusinessCategory | None = None
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=32)
    description: str | None = Field(default=None, max_length=2000)


class BusinessResponse(BaseModel):
    """Business response."""

    model_config = ConfigDict(from_attributes=True)

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
