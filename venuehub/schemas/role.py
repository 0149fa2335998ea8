"""Role API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RoleCreate(BaseModel):
    """Request body for creating a custom role."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    permission_ids: list[str] = Field(
        default_factory=list,
        description="Permission names, e.g. partners.read.all",
    )
    level: int = Field(default=10, ge=0, le=100)


class RoleUpdate(BaseModel):
    """Request body for updating a role. permission_ids replaces the whole set."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    permission_ids: list[str] | None = None
    level: int | None = Field(default=None, ge=0, le=100)


class RoleResponse(BaseModel):
    """Role response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    business_id: str
    name: str
    description: str
    permission_ids: list[str]
    is_system: bool
    level: int
    is_archived: bool
    archived_at: datetime | None = None
    archived_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
