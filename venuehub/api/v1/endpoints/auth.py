"""Auth API: register a business, login, and the current user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from venuehub.api.v1.dependencies import (
    CurrentUser,
    get_authorization_service,
    get_business_service,
)
from venuehub.application.services import AuthorizationService, BusinessService
from venuehub.core.limiter import limit_auth, limit_register
from venuehub.schemas.auth import (
    LoginRequest,
    MyPermissionsResponse,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from venuehub.schemas.business import BusinessResponse
from venuehub.schemas.user import UserResponse

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=201)
@limit_register
async def register(
    request: Request,
    body: RegisterRequest,
    service: Annotated[BusinessService, Depends(get_business_service)],
):
    """Create a business with its default roles and owner; return the owner's token."""
    result = await service.register(
        business_name=body.business_name,
        category=body.category,
        owner_name=body.name,
        email=body.email,
        password=body.password,
        phone=body.phone,
    )
    return RegisterResponse(
        access_token=result.access_token,
        user=UserResponse.model_validate(result.owner),
        business=BusinessResponse.model_validate(result.business),
    )


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    service: Annotated[BusinessService, Depends(get_business_service)],
):
    """Authenticate with email and password; return JWT."""
    user, token = await service.authenticate(body.email, body.password)
    return TokenResponse(access_token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUser):
    """Return the currently authenticated user. Requires Authorization: Bearer <token>."""
    return UserResponse.model_validate(current_user)


@router.get("/me/permissions", response_model=MyPermissionsResponse)
async def get_my_permissions(
    current_user: CurrentUser,
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    """Effective permissions of the current user (the whole catalog for super-admins)."""
    effective = await auth_svc.get_effective_permissions(current_user)
    return MyPermissionsResponse(
        is_super_admin=current_user.is_super_admin,
        role_type=current_user.role_type,
        permissions=sorted(effective),
    )
