"""Application services: authorization, archive lifecycle, and per-resource use cases."""

from venuehub.application.services.activity_logger import ActivityLogger
from venuehub.application.services.archive_policy import ArchivePolicy, RecordType
from venuehub.application.services.archive_service import ArchiveService
from venuehub.application.services.authorization_service import AuthorizationService
from venuehub.application.services.business_service import BusinessService
from venuehub.application.services.permission_resolver import PermissionResolver
from venuehub.application.services.permission_service import PermissionService
from venuehub.application.services.record_service import RecordService
from venuehub.application.services.reminder_service import ReminderService
from venuehub.application.services.role_service import RoleService
from venuehub.application.services.user_service import UserService

__all__ = [
    "ActivityLogger",
    "ArchivePolicy",
    "ArchiveService",
    "AuthorizationService",
    "BusinessService",
    "PermissionResolver",
    "PermissionService",
    "RecordService",
    "RecordType",
    "ReminderService",
    "RoleService",
    "UserService",
]
