"""Application DTOs (frozen dataclasses; no storage types)."""

from venuehub.application.dtos.activity import ActivityLogResult
from venuehub.application.dtos.business import BusinessResult, RegistrationResult
from venuehub.application.dtos.common import ArchiveCounts, ListQuery, Page
from venuehub.application.dtos.permission import PermissionGroup, PermissionResult
from venuehub.application.dtos.record import RecordResult
from venuehub.application.dtos.role import RoleResult
from venuehub.application.dtos.user import BulkOutcome, UserResult

__all__ = [
    "ActivityLogResult",
    "ArchiveCounts",
    "BulkOutcome",
    "BusinessResult",
    "ListQuery",
    "Page",
    "PermissionGroup",
    "PermissionResult",
    "RecordResult",
    "RegistrationResult",
    "RoleResult",
    "UserResult",
]
