"""Permission catalog API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from venuehub.domain.enums import PermissionAction, PermissionModule, PermissionScope


class PermissionCreate(BaseModel):
    """Request body for adding a catalog entry (super-admin)."""

    model_config = ConfigDict(use_enum_values=True)

    module: PermissionModule
    action: PermissionAction
    scope: PermissionScope = PermissionScope.ALL
    display_name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=500)


class PermissionResponse(BaseModel):
    """Catalog entry; id and name are the same value."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    module: str
    action: str
    scope: str
    display_name: str
    description: str
    is_active: bool


class PermissionGroupResponse(BaseModel):
    """Catalog entries of one module."""

    model_config = ConfigDict(from_attributes=True)

    module: str
    permissions: list[PermissionResponse]
