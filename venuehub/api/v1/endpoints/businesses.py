"""Businesses API: the current tenant's profile and platform archive/restore."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from venuehub.api.v1.dependencies import (
    BusinessId,
    authorize,
    get_business_service,
    require_super_admin,
)
from venuehub.application.dtos.user import UserResult
from venuehub.application.services import BusinessService
from venuehub.core.limiter import limit_writes
from venuehub.schemas.business import BusinessResponse, BusinessUpdate

router = APIRouter()

BusinessServiceDep = Annotated[BusinessService, Depends(get_business_service)]


@router.get("/current", response_model=BusinessResponse)
async def get_current_business(
    business_id: BusinessId,
    service: BusinessServiceDep,
    _: Annotated[object, Depends(authorize("business.read.all"))] = None,
):
    """Business the caller acts in."""
    return BusinessResponse.model_validate(await service.get_current(business_id))


@router.put("/current", response_model=BusinessResponse)
@limit_writes
async def update_current_business(
    request: Request,
    body: BusinessUpdate,
    business_id: BusinessId,
    service: BusinessServiceDep,
    current_user: Annotated[UserResult, Depends(authorize("business.update.all"))],
):
    business = await service.update_current(
        business_id, current_user.id, body.model_dump(exclude_unset=True)
    )
    return BusinessResponse.model_validate(business)


@router.patch("/{business_id}/archive", response_model=BusinessResponse)
@limit_writes
async def archive_business(
    request: Request,
    business_id: str,
    service: BusinessServiceDep,
    current_user: Annotated[UserResult, Depends(require_super_admin)],
):
    """Archive a business; its users can no longer log in (super-admin)."""
    business = await service.archive_business(business_id, current_user.id)
    return BusinessResponse.model_validate(business)


@router.patch("/{business_id}/restore", response_model=BusinessResponse)
@limit_writes
async def restore_business(
    request: Request,
    business_id: str,
    service: BusinessServiceDep,
    current_user: Annotated[UserResult, Depends(require_super_admin)],
):
    business = await service.restore_business(business_id, current_user.id)
    return BusinessResponse.model_validate(business)
