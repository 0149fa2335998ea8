"""Shared enumerations for the venuehub application.

Cross-cutting enums used by application and infrastructure (activity log,
notifications). Domain-specific enums live in venuehub.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ActivityAction(_ValuesMixin, str, Enum):
    """Activity log action types (who did what to which record)."""

    LOGIN = "login"
    REGISTERED = "registered"
    CREATED = "created"
    UPDATED = "updated"
    ARCHIVED = "archived"
    RESTORED = "restored"
    DELETED = "deleted"
    ROLE_ASSIGNED = "role_assigned"
    PERMISSIONS_CHANGED = "permissions_changed"
    PASSWORD_RESET = "password_reset"
    STATUS_CHANGED = "status_changed"
