"""Application service dependencies (composition root).

Routes depend on these, never on infrastructure directly. Collaborators
created in the lifespan (cache, WebSocket manager) are read from app.state
when present, so the app also works without a lifespan (tests).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request

from venuehub.application.services import (
    ActivityLogger,
    ArchiveService,
    AuthorizationService,
    BusinessService,
    PermissionResolver,
    PermissionService,
    RecordService,
    ReminderService,
    RoleService,
    UserService,
)
from venuehub.application.services.archive_policy import (
    PARTNER_RECORD,
    REMINDER_RECORD,
    RecordType,
)
from venuehub.core.config import get_settings
from venuehub.infrastructure.exceptions import DocumentExistsError
from venuehub.infrastructure.notifications import WebSocketNotifier
from venuehub.infrastructure.repositories import (
    ActivityLogRepository,
    BusinessRepository,
    PermissionRepository,
    ReferenceRepository,
    RoleRepository,
    UserRepository,
)
from venuehub.infrastructure.security import AuthSecurity
from venuehub.infrastructure.services import BusinessInitializationService

from .db import (
    StoreDep,
    build_record_repo,
    get_activity_log_repo,
    get_business_repo,
    get_permission_repo,
    get_reference_repo,
    get_role_repo,
    get_user_repo,
)


def get_auth_security() -> AuthSecurity:
    """Auth token creation and password hashing (composition root)."""
    return AuthSecurity()


def get_notifier(request: Request) -> WebSocketNotifier:
    """Tenant notifications over the WebSocket manager (no-op without one)."""
    return WebSocketNotifier(getattr(request.app.state, "ws_manager", None))


def get_activity_logger(
    repo: Annotated[ActivityLogRepository, Depends(get_activity_log_repo)],
) -> ActivityLogger:
    return ActivityLogger(repo)


def get_archive_service(
    reference_repo: Annotated[ReferenceRepository, Depends(get_reference_repo)],
    activity_logger: Annotated[ActivityLogger, Depends(get_activity_logger)],
    notifier: Annotated[WebSocketNotifier, Depends(get_notifier)],
) -> ArchiveService:
    """ArchiveService with the dependency checks enabled in settings."""
    return ArchiveService(
        reference_repo,
        activity_logger=activity_logger,
        notifier=notifier,
        guarded_types=get_settings().archive_dependency_check_types,
    )


def get_authorization_service(
    request: Request,
    role_repo: Annotated[RoleRepository, Depends(get_role_repo)],
    permission_repo: Annotated[PermissionRepository, Depends(get_permission_repo)],
) -> AuthorizationService:
    """Build AuthorizationService with permission resolver and optional cache.

    Cache is set in app lifespan (app.state.cache) when Redis is enabled;
    otherwise cache is None and permission checks hit the store only. One
    instance per request, so its memo is request-scoped.
    """
    return AuthorizationService(
        permission_resolver=PermissionResolver(role_repo, permission_repo),
        cache=getattr(request.app.state, "cache", None),
        cache_ttl=get_settings().cache_ttl_permissions,
    )


def get_permission_service(
    permission_repo: Annotated[PermissionRepository, Depends(get_permission_repo)],
) -> PermissionService:
    return PermissionService(permission_repo, duplicate_errors=(DocumentExistsError,))


def get_role_service(
    role_repo: Annotated[RoleRepository, Depends(get_role_repo)],
    permission_repo: Annotated[PermissionRepository, Depends(get_permission_repo)],
    archive_service: Annotated[ArchiveService, Depends(get_archive_service)],
    authorization: Annotated[AuthorizationService, Depends(get_authorization_service)],
    activity_logger: Annotated[ActivityLogger, Depends(get_activity_logger)],
) -> RoleService:
    return RoleService(
        role_repo, permission_repo, archive_service, authorization, activity_logger
    )


def get_user_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    role_repo: Annotated[RoleRepository, Depends(get_role_repo)],
    permission_repo: Annotated[PermissionRepository, Depends(get_permission_repo)],
    business_repo: Annotated[BusinessRepository, Depends(get_business_repo)],
    archive_service: Annotated[ArchiveService, Depends(get_archive_service)],
    auth_security: Annotated[AuthSecurity, Depends(get_auth_security)],
    authorization: Annotated[AuthorizationService, Depends(get_authorization_service)],
    activity_logger: Annotated[ActivityLogger, Depends(get_activity_logger)],
    activity_repo: Annotated[ActivityLogRepository, Depends(get_activity_log_repo)],
) -> UserService:
    return UserService(
        user_repo=user_repo,
        role_repo=role_repo,
        permission_repo=permission_repo,
        business_repo=business_repo,
        archive_service=archive_service,
        auth_security=auth_security,
        authorization=authorization,
        activity_logger=activity_logger,
        activity_repo=activity_repo,
    )


def get_business_service(
    business_repo: Annotated[BusinessRepository, Depends(get_business_repo)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    role_repo: Annotated[RoleRepository, Depends(get_role_repo)],
    permission_repo: Annotated[PermissionRepository, Depends(get_permission_repo)],
    auth_security: Annotated[AuthSecurity, Depends(get_auth_security)],
    archive_service: Annotated[ArchiveService, Depends(get_archive_service)],
    activity_logger: Annotated[ActivityLogger, Depends(get_activity_logger)],
) -> BusinessService:
    return BusinessService(
        business_repo=business_repo,
        user_repo=user_repo,
        init_service=BusinessInitializationService(role_repo, permission_repo),
        auth_security=auth_security,
        archive_service=archive_service,
        activity_logger=activity_logger,
    )


def record_service_dependency(record_type: RecordType) -> Callable[..., RecordService]:
    """Dependency factory: RecordService bound to one record type."""

    def _build(
        store: StoreDep,
        archive_service: Annotated[ArchiveService, Depends(get_archive_service)],
        activity_logger: Annotated[ActivityLogger, Depends(get_activity_logger)],
        notifier: Annotated[WebSocketNotifier, Depends(get_notifier)],
    ) -> RecordService:
        return RecordService(
            record_type,
            build_record_repo(store, record_type),
            archive_service,
            partner_repo=build_record_repo(store, PARTNER_RECORD),
            activity_logger=activity_logger,
            notifier=notifier,
        )

    return _build


def get_reminder_service(
    store: StoreDep,
    activity_logger: Annotated[ActivityLogger, Depends(get_activity_logger)],
    notifier: Annotated[WebSocketNotifier, Depends(get_notifier)],
) -> ReminderService:
    return ReminderService(
        build_record_repo(store, REMINDER_RECORD), activity_logger, notifier
    )
