"""Infrastructure services (business initialization)."""

from venuehub.infrastructure.services.business_initialization_service import (
    DEFAULT_PERMISSIONS,
    DEFAULT_ROLES,
    BusinessInitializationService,
)

__all__ = ["BusinessInitializationService", "DEFAULT_PERMISSIONS", "DEFAULT_ROLES"]
