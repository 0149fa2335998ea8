"""Authentication, tenant resolution, and the access gate (composition root).

authorize(name) and authorize_any_of(*role_types) are dependency factories
that return the authenticated user when the check passes. They never modify
the request or the user; failing checks raise AuthenticationException (401)
or AuthorizationException (403).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from venuehub.application.dtos.user import UserResult
from venuehub.application.services import AuthorizationService
from venuehub.core.config import get_settings
from venuehub.domain.enums import RoleType
from venuehub.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from venuehub.infrastructure.repositories import BusinessRepository, UserRepository
from venuehub.infrastructure.security import verify_token
from venuehub.shared.context import set_request_context

from .db import get_business_repo, get_user_repo
from .services import get_authorization_service

_http_bearer = HTTPBearer(auto_error=False)


async def resolve_user_from_token(
    token: str, user_repo: UserRepository
) -> UserResult | None:
    """Return the active, non-archived user named by a valid token; else None."""
    try:
        payload = verify_token(token)
    except ValueError:
        return None
    user = await user_repo.get_by_id(payload["sub"])
    if user is None or not user.is_active or user.is_archived:
        return None
    return user


async def get_current_user_optional(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> UserResult | None:
    """Return current user from JWT if present; else None. Use for optional auth routes."""
    if not credentials:
        return None
    user = await resolve_user_from_token(credentials.credentials, user_repo)
    if user is not None:
        set_request_context(
            user.id,
            user.business_id,
            request.client.host if request.client else None,
        )
    return user


async def get_current_user(
    current_user: Annotated[UserResult | None, Depends(get_current_user_optional)],
) -> UserResult:
    """Return current user from JWT; raise 401 if missing or invalid."""
    if current_user is None:
        raise AuthenticationException()
    return current_user


CurrentUser = Annotated[UserResult, Depends(get_current_user)]


async def get_business_id(
    request: Request,
    current_user: CurrentUser,
    business_repo: Annotated[BusinessRepository, Depends(get_business_repo)],
) -> str:
    """Business the request acts in.

    Regular users always act in their own business. Super-admins pick one with
    the business header; it must name an existing business.
    """
    if not current_user.is_super_admin:
        if not current_user.business_id:
            raise AuthorizationException(message="User is not attached to a business")
        return current_user.business_id
    header = get_settings().business_header_name
    business_id = request.headers.get(header)
    if not business_id:
        raise ValidationException(f"Missing required header: {header}", field=header)
    if await business_repo.get_by_id(business_id) is None:
        raise ResourceNotFoundException("business", business_id)
    return business_id


BusinessId = Annotated[str, Depends(get_business_id)]


def authorize(permission_name: str) -> Callable[..., Awaitable[UserResult]]:
    """Dependency factory: require JWT auth and the named permission."""

    async def _authorize(
        current_user: CurrentUser,
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> UserResult:
        await auth_svc.require_permission(current_user, permission_name)
        return current_user

    return _authorize


def authorize_any_of(*role_types: RoleType) -> Callable[..., Awaitable[UserResult]]:
    """Dependency factory: require JWT auth and one of the coarse role types."""

    async def _authorize(
        current_user: CurrentUser,
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> UserResult:
        auth_svc.require_role_type(current_user, list(role_types))
        return current_user

    return _authorize


async def require_super_admin(current_user: CurrentUser) -> UserResult:
    """Platform administration routes."""
    if not current_user.is_super_admin:
        raise AuthorizationException(message="Super admin access required")
    return current_user
