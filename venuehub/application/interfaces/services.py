"""Service interfaces (ports) for the application layer.

Protocols define contracts for collaborators that live in infrastructure
(cache, notifications, activity logging).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from venuehub.shared.enums import ActivityAction

if TYPE_CHECKING:
    from venuehub.application.dtos.role import RoleResult


class ICacheService(Protocol):
    """Protocol for cache (e.g. Redis) used by authorization."""

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds."""

    async def delete(self, key: str) -> bool:
        """Remove key from cache."""

    async def delete_pattern(self, pattern: str) -> int:
        """Remove all keys matching pattern; return number removed."""


class INotifier(Protocol):
    """Pushes tenant-scoped change notifications to connected clients."""

    async def notify(
        self, business_id: str, event: str, payload: dict[str, Any]
    ) -> None:
        """Send event to every client of the business. Must not raise."""


class IActivityLogger(Protocol):
    """Records who did what; failures never reach the caller."""

    async def log(
        self,
        business_id: str | None,
        user_id: str | None,
        action: ActivityAction,
        resource_type: str,
        resource_id: str | None = None,
        details: str = "",
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Record one activity entry."""


class IBusinessInitializationService(Protocol):
    """Seeds the default roles of a new business."""

    async def initialize_business_roles(
        self, business_id: str, created_by: str | None = None
    ) -> dict[str, RoleResult]:
        """Create the system roles; return them keyed by role name."""


class IAuthSecurity(Protocol):
    """Token creation and password hashing."""

    def create_access_token(self, data: dict[str, Any]) -> str:
        """Return a signed access token for the claims."""

    async def hash_password(self, password: str) -> str:
        """Return the password hash."""

    async def verify_password(self, password: str, hashed: str) -> bool:
        """Return True if password matches hashed."""

    async def burn_verification(self, password: str) -> None:
        """Spend the time of a real verification (unknown account)."""
