"""Application ports (Protocols implemented by infrastructure)."""

from venuehub.application.interfaces.repositories import (
    Filter,
    IActivityLogRepository,
    IArchivableRepository,
    IBusinessRepository,
    IPermissionRepository,
    IRecordRepository,
    IReferenceRepository,
    IRoleRepository,
    IStoredSnapshot,
    IUserRepository,
)
from venuehub.application.interfaces.services import (
    IActivityLogger,
    IAuthSecurity,
    IBusinessInitializationService,
    ICacheService,
    INotifier,
)

__all__ = [
    "Filter",
    "IActivityLogRepository",
    "IActivityLogger",
    "IAuthSecurity",
    "IBusinessInitializationService",
    "IBusinessRepository",
    "IArchivableRepository",
    "ICacheService",
    "INotifier",
    "IPermissionRepository",
    "IRecordRepository",
    "IReferenceRepository",
    "IRoleRepository",
    "IStoredSnapshot",
    "IUserRepository",
]
