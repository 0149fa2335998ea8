"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the document store, repositories, and
application services. Routes depend only on these, not on infrastructure.
"""

from .auth import (
    BusinessId,
    CurrentUser,
    authorize,
    authorize_any_of,
    get_business_id,
    get_current_user,
    get_current_user_optional,
    require_super_admin,
    resolve_user_from_token,
)
from .db import RECORD_TYPES, get_store, get_user_repo
from .pagination import ArchivedQueryDep, ListQueryDep, archived_query, list_query
from .services import (
    get_auth_security,
    get_authorization_service,
    get_business_service,
    get_permission_service,
    get_reminder_service,
    get_role_service,
    get_user_service,
    record_service_dependency,
)

__all__ = [
    "RECORD_TYPES",
    "ArchivedQueryDep",
    "BusinessId",
    "CurrentUser",
    "ListQueryDep",
    "archived_query",
    "authorize",
    "authorize_any_of",
    "get_auth_security",
    "get_authorization_service",
    "get_business_id",
    "get_business_service",
    "get_current_user",
    "get_current_user_optional",
    "get_permission_service",
    "get_reminder_service",
    "get_role_service",
    "get_store",
    "get_user_repo",
    "get_user_service",
    "list_query",
    "record_service_dependency",
    "require_super_admin",
    "resolve_user_from_token",
]
