"""Roles API: tenant roles and their permission sets.

DELETE archives; roles are never hard-deleted.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from venuehub.api.v1.dependencies import (
    BusinessId,
    ListQueryDep,
    authorize,
    get_role_service,
)
from venuehub.application.dtos.user import UserResult
from venuehub.application.services import RoleService
from venuehub.core.limiter import limit_writes
from venuehub.schemas.common import PageResponse, to_page_response
from venuehub.schemas.role import RoleCreate, RoleResponse, RoleUpdate

router = APIRouter()

RoleServiceDep = Annotated[RoleService, Depends(get_role_service)]


@router.get("", response_model=PageResponse[RoleResponse])
async def list_roles(
    business_id: BusinessId,
    query: ListQueryDep,
    service: RoleServiceDep,
    _: Annotated[object, Depends(authorize("roles.read.all"))] = None,
):
    """List roles of the business (archived ones only with include_archived=true)."""
    page = await service.list_roles(business_id, query)
    return to_page_response(page, RoleResponse.model_validate)


@router.post("", response_model=RoleResponse, status_code=201)
@limit_writes
async def create_role(
    request: Request,
    body: RoleCreate,
    business_id: BusinessId,
    service: RoleServiceDep,
    current_user: Annotated[UserResult, Depends(authorize("roles.create.all"))],
):
    """Create a custom role with a set of catalog permissions."""
    role = await service.create_role(
        business_id,
        current_user.id,
        name=body.name,
        description=body.description,
        permission_ids=body.permission_ids,
        level=body.level,
    )
    return RoleResponse.model_validate(role)


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    role_id: str,
    business_id: BusinessId,
    service: RoleServiceDep,
    _: Annotated[object, Depends(authorize("roles.read.all"))] = None,
):
    return RoleResponse.model_validate(await service.get_role(business_id, role_id))


@router.put("/{role_id}", response_model=RoleResponse)
@limit_writes
async def update_role(
    request: Request,
    role_id: str,
    body: RoleUpdate,
    business_id: BusinessId,
    service: RoleServiceDep,
    current_user: Annotated[UserResult, Depends(authorize("roles.update.all"))],
):
    """Update a role. permission_ids, when sent, replaces the whole set."""
    role = await service.update_role(
        business_id,
        role_id,
        current_user.id,
        name=body.name,
        description=body.description,
        permission_ids=body.permission_ids,
        level=body.level,
    )
    return RoleResponse.model_validate(role)


@router.delete("/{role_id}", response_model=RoleResponse)
@limit_writes
async def archive_role(
    request: Request,
    role_id: str,
    business_id: BusinessId,
    service: RoleServiceDep,
    current_user: Annotated[UserResult, Depends(authorize("roles.delete.all"))],
):
    """Archive a role."""
    role = await service.archive_role(business_id, role_id, current_user.id)
    return RoleResponse.model_validate(role)


@router.patch("/{role_id}/restore", response_model=RoleResponse)
@limit_writes
async def restore_role(
    request: Request,
    role_id: str,
    business_id: BusinessId,
    service: RoleServiceDep,
    current_user: Annotated[UserResult, Depends(authorize("roles.update.all"))],
):
    """Restore an archived role (its name must still be free)."""
    role = await service.restore_role(business_id, role_id, current_user.id)
    return RoleResponse.model_validate(role)
