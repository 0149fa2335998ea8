"""Users API: team members of the current business.

Archive/restore are PATCH sub-resources; DELETE /{id}/permanent removes an
archived user for good. Bulk routes are declared before /{user_id} routes so
"bulk" is never read as an id.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from venuehub.api.v1.dependencies import (
    ArchivedQueryDep,
    BusinessId,
    ListQueryDep,
    authorize,
    authorize_any_of,
    get_user_service,
)
from venuehub.application.dtos.user import UserResult
from venuehub.application.services import UserService
from venuehub.core.limiter import limit_writes
from venuehub.domain.enums import RoleType
from venuehub.schemas.activity import ActivityLogResponse
from venuehub.schemas.common import (
    ArchiveStatsResponse,
    BulkIdsRequest,
    BulkOutcomeResponse,
    MessageResponse,
    PageResponse,
    to_page_response,
)
from venuehub.schemas.user import (
    PasswordReset,
    UserCreate,
    UserPermissionsUpdate,
    UserResponse,
    UserRoleAssign,
    UserUpdate,
)

router = APIRouter()

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.get("", response_model=PageResponse[UserResponse])
async def list_users(
    business_id: BusinessId,
    query: ListQueryDep,
    service: UserServiceDep,
    _: Annotated[object, Depends(authorize("users.read.all"))] = None,
):
    """List users of the business (paginated)."""
    page = await service.list_users(business_id, query)
    return to_page_response(page, UserResponse.model_validate)


@router.post("", response_model=UserResponse, status_code=201)
@limit_writes
async def create_user(
    request: Request,
    body: UserCreate,
    business_id: BusinessId,
    service: UserServiceDep,
    current_user: Annotated[UserResult, Depends(authorize("users.create.all"))],
):
    """Add a user to the business, optionally with a role."""
    user = await service.create_user(
        business_id,
        current_user,
        body.name,
        body.email,
        body.password,
        role_id=body.role_id,
        phone=body.phone,
    )
    return UserResponse.model_validate(user)


@router.get("/archived", response_model=PageResponse[UserResponse])
async def list_archived_users(
    business_id: BusinessId,
    query: ArchivedQueryDep,
    service: UserServiceDep,
    _: Annotated[object, Depends(authorize("users.read.all"))] = None,
):
    page = await service.list_users(business_id, query)
    return to_page_response(page, UserResponse.model_validate)


@router.get("/stats", response_model=ArchiveStatsResponse)
async def user_stats(
    business_id: BusinessId,
    service: UserServiceDep,
    _: Annotated[object, Depends(authorize("users.read.all"))] = None,
):
    counts = await service.stats(business_id)
    return ArchiveStatsResponse(
        active=counts.active, archived=counts.archived, total=counts.total
    )


@router.patch("/bulk/archive", response_model=BulkOutcomeResponse)
@limit_writes
async def bulk_archive_users(
    request: Request,
    body: BulkIdsRequest,
    business_id: BusinessId,
    service: UserServiceDep,
    current_user: Annotated[UserResult, Depends(authorize("users.delete.all"))],
):
    """Archive several users; each id succeeds or fails on its own."""
    outcome = await service.bulk_archive(business_id, body.ids, current_user)
    return BulkOutcomeResponse(succeeded=outcome.succeeded, failed=outcome.failed)


@router.patch("/bulk/restore", response_model=BulkOutcomeResponse)
@limit_writes
async def bulk_restore_users(
    request: Request,
    body: BulkIdsRequest,
    business_id: BusinessId,
    service: UserServiceDep,
    current_user: Annotated[UserResult, Depends(authorize("users.update.all"))],
):
    outcome = await service.bulk_restore(business_id, body.ids, current_user)
    return BulkOutcomeResponse(succeeded=outcome.succeeded, failed=outcome.failed)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    business_id: BusinessId,
    service: UserServiceDep,
    _: Annotated[object, Depends(authorize("users.read.all"))] = None,
):
    """Get a user of the business, archived or not."""
    return UserResponse.model_validate(await service.get_user(business_id, user_id))


@router.put("/{user_id}", response_model=UserResponse)
@limit_writes
async def update_user(
    request: Request,
    user_id: str,
    body: UserUpdate,
    business_id: BusinessId,
    service: UserServiceDep,
    current_user: Annotated[UserResult, Depends(authorize("users.update.all"))],
):
    """Update name, email, or phone."""
    user = await service.update_user(
        business_id, user_id, current_user, body.model_dump(exclude_unset=True)
    )
    return UserResponse.model_validate(user)


@router.patch("/{user_id}/archive", response_model=UserResponse)
@limit_writes
async def archive_user(
    request: Request,
    user_id: str,
    business_id: BusinessId,
    service: UserServiceDep,
    current_user: Annotated[UserResult, Depends(authorize("users.delete.all"))],
):
    """Archive a user; they can no longer log in."""
    user = await service.archive_user(business_id, user_id, current_user)
    return UserResponse.model_validate(user)


@router.patch("/{user_id}/restore", response_model=UserResponse)
@limit_writes
async def restore_user(
    request: Request,
    user_id: str,
    business_id: BusinessId,
    service: UserServiceDep,
    current_user: Annotated[UserResult, Depends(authorize("users.update.all"))],
):
    user = await service.restore_user(business_id, user_id, current_user)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}/permanent", status_code=204)
@limit_writes
async def delete_user_permanently(
    request: Request,
    user_id: str,
    business_id: BusinessId,
    service: UserServiceDep,
    current_user: Annotated[UserResult, Depends(authorize("users.delete.all"))],
) -> None:
    """Delete an archived user (never the business owner)."""
    await service.permanent_delete(business_id, user_id, current_user)


@router.put("/{user_id}/role", response_model=UserResponse)
@limit_writes
async def assign_user_role(
    request: Request,
    user_id: str,
    body: UserRoleAssign,
    business_id: BusinessId,
    service: UserServiceDep,
    current_user: Annotated[
        UserResult, Depends(authorize_any_of(RoleType.OWNER, RoleType.MANAGER))
    ],
):
    """Assign a role (owners, and managers for roles below their own level)."""
    user = await service.assign_role(business_id, user_id, current_user, body.role_id)
    return UserResponse.model_validate(user)


@router.put("/{user_id}/permissions", response_model=UserResponse)
@limit_writes
async def set_user_permissions(
    request: Request,
    user_id: str,
    body: UserPermissionsUpdate,
    business_id: BusinessId,
    service: UserServiceDep,
    current_user: Annotated[UserResult, Depends(authorize_any_of(RoleType.OWNER))],
):
    """Replace the user's granted and revoked permissions (owners only)."""
    user = await service.set_custom_permissions(
        business_id, user_id, current_user, body.granted, body.revoked
    )
    return UserResponse.model_validate(user)


@router.post("/{user_id}/reset-password", response_model=MessageResponse)
@limit_writes
async def reset_user_password(
    request: Request,
    user_id: str,
    body: PasswordReset,
    business_id: BusinessId,
    service: UserServiceDep,
    current_user: Annotated[UserResult, Depends(authorize_any_of(RoleType.OWNER))],
):
    await service.reset_password(business_id, user_id, current_user, body.new_password)
    return MessageResponse(message="Password reset")


@router.get("/{user_id}/activity", response_model=list[ActivityLogResponse])
async def get_user_activity(
    user_id: str,
    business_id: BusinessId,
    service: UserServiceDep,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
    _: Annotated[object, Depends(authorize("users.read.all"))] = None,
):
    """Recent activity of the user, newest first."""
    entries = await service.get_activity(business_id, user_id, skip, limit)
    return [ActivityLogResponse.model_validate(e) for e in entries]
