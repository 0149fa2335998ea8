"""User API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    """Request body for adding a user; the coarse role type follows role_id."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=128)
    email: EmailStr
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    phone: str | None = Field(default=None, max_length=32)
    role_id: str | None = None


class UserUpdate(BaseModel):
    """Request body for updating a user's profile (all fields optional)."""

    name: str | None = Field(default=None, min_length=1, max_length=128)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=32)


class UserRoleAssign(BaseModel):
    """Request body for PUT /users/{id}/role."""

    model_config = ConfigDict(extra="forbid")

    role_id: str


class UserPermissionsUpdate(BaseModel):
    """Request body for PUT /users/{id}/permissions (replaces both lists)."""

    granted: list[str] = Field(default_factory=list)
    revoked: list[str] = Field(default_factory=list)


class PasswordReset(BaseModel):
    """Request body for POST /users/{id}/reset-password."""

    new_password: str = Field(..., min_length=8)


class UserResponse(BaseModel):
    """User response (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    business_id: str | None
    name: str
    email: str
    phone: str | None = None
    role_id: str | None
    role_type: str
    is_super_admin: bool
    is_active: bool
    granted: list[str]
    revoked: list[str]
    is_archived: bool
    archived_at: datetime | None = None
    archived_by: str | None = None
    last_login_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
