"""Permissions API: the global catalog, grouped by module."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from venuehub.api.v1.dependencies import (
    authorize,
    get_permission_service,
    require_super_admin,
)
from venuehub.application.services import PermissionService
from venuehub.core.limiter import limit_writes
from venuehub.schemas.permission import (
    PermissionCreate,
    PermissionGroupResponse,
    PermissionResponse,
)

router = APIRouter()


@router.get("", response_model=list[PermissionGroupResponse])
async def list_permissions(
    service: Annotated[PermissionService, Depends(get_permission_service)],
    active_only: bool = True,
    _: Annotated[object, Depends(authorize("roles.read.all"))] = None,
):
    """List the permission catalog grouped by module (used when building roles)."""
    groups = await service.list_catalog(active_only=active_only)
    return [PermissionGroupResponse.model_validate(g) for g in groups]


@router.post("", response_model=PermissionResponse, status_code=201)
@limit_writes
async def create_permission(
    request: Request,
    body: PermissionCreate,
    service: Annotated[PermissionService, Depends(get_permission_service)],
    _: Annotated[object, Depends(require_super_admin)] = None,
):
    """Add a catalog entry (platform administration)."""
    created = await service.create_permission(
        module=body.module,
        action=body.action,
        scope=body.scope,
        display_name=body.display_name,
        description=body.description,
    )
    return PermissionResponse.model_validate(created)
