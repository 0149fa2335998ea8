"""Document-store repositories (backend-neutral: Firestore REST or in-memory)."""

from venuehub.infrastructure.repositories.activity_log_repo import ActivityLogRepository
from venuehub.infrastructure.repositories.base import DocumentRepository
from venuehub.infrastructure.repositories.business_repo import BusinessRepository
from venuehub.infrastructure.repositories.permission_repo import PermissionRepository
from venuehub.infrastructure.repositories.record_repo import RecordRepository
from venuehub.infrastructure.repositories.reference_repo import ReferenceRepository
from venuehub.infrastructure.repositories.role_repo import RoleRepository
from venuehub.infrastructure.repositories.user_repo import UserRepository

__all__ = [
    "ActivityLogRepository",
    "BusinessRepository",
    "DocumentRepository",
    "PermissionRepository",
    "RecordRepository",
    "ReferenceRepository",
    "RoleRepository",
    "UserRepository",
]
