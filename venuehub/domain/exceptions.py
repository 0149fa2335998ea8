"""Domain exceptions for the venuehub application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers (by error_code).
"""

from typing import Any


class VenueHubException(Exception):
    """Base exception for all venuehub application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(VenueHubException):
    """Raised when input validation fails (e.g. invalid format or unknown reference)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(VenueHubException):
    """Raised when no authenticated identity is available (invalid credentials or token)."""

    def __init__(self, message: str = "Authentication required") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(VenueHubException):
    """Raised when the user lacks the permission or role type required for the operation."""

    def __init__(
        self,
        permission: str | None = None,
        role_types: list[str] | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with the missing permission or the accepted role types.

        Args:
            permission: Fine-grained permission name that was required.
            role_types: Coarse role types that would have been accepted.
            message: Human-readable message; default used when nothing else is given.
        """
        details: dict[str, Any] = {}
        if permission:
            message = f"Permission denied: {permission} required"
            details["permission"] = permission
        elif role_types:
            message = f"Permission denied: one of roles {', '.join(role_types)} required"
            details["role_types"] = list(role_types)
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(VenueHubException):
    """Raised when a resource does not exist or belongs to another business."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and identifier.

        Args:
            resource_type: Kind of resource (e.g. 'role', 'partner').
            resource_id: The identifier that was not found.
        """
        super().__init__(
            f"{resource_type.capitalize()} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(VenueHubException):
    """Raised when a uniqueness rule would be violated among active records."""

    def __init__(self, resource_type: str, field: str, value: Any) -> None:
        """Initialize with the conflicting field and value.

        Args:
            resource_type: Kind of resource (e.g. 'partner').
            field: Unique field that collides (e.g. 'email').
            value: The value already in use.
        """
        super().__init__(
            f"An active {resource_type} with this {field} already exists",
            "CONFLICT",
            {"resource_type": resource_type, "field": field, "value": value},
        )


class AlreadyArchivedException(VenueHubException):
    """Raised when archiving a record that is already archived."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and identifier."""
        super().__init__(
            f"{resource_type.capitalize()} is already archived",
            "ALREADY_ARCHIVED",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class NotArchivedException(VenueHubException):
    """Raised when restoring a record that is not archived."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and identifier."""
        super().__init__(
            f"{resource_type.capitalize()} is not archived",
            "NOT_ARCHIVED",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConcurrentModificationException(VenueHubException):
    """Raised when a record keeps changing underneath a conditional write."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and identifier."""
        super().__init__(
            f"{resource_type.capitalize()} was modified concurrently; try again",
            "CONFLICT",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ArchiveBlockedException(VenueHubException):
    """Raised when dependent records prevent archiving or deleting a record."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        dependent: str,
        count: int,
    ) -> None:
        """Initialize with the blocking dependency.

        Args:
            resource_type: Kind of resource being archived (e.g. 'partner').
            resource_id: Identifier of that resource.
            dependent: Description of the blocking records (e.g. 'active events').
            count: Number of blocking records found.
        """
        super().__init__(
            f"Cannot archive {resource_type}: {count} {dependent} still reference it",
            "ARCHIVE_BLOCKED",
            {
                "resource_type": resource_type,
                "resource_id": resource_id,
                "dependent": dependent,
                "count": count,
            },
        )


class BusinessRuleException(VenueHubException):
    """Raised when an operation is well-formed but not allowed in the current state."""

    def __init__(self, message: str, rule: str | None = None) -> None:
        """Initialize with message and optional rule identifier.

        Args:
            message: Human-readable description of the rule.
            rule: Optional short machine-readable rule name.
        """
        details = {"rule": rule} if rule else {}
        super().__init__(message, "BUSINESS_RULE_VIOLATION", details)
