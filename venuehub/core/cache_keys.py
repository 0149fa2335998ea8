"""Cache key builders. Single place for key format.

Key components (business_id, user_id) must not contain CACHE_KEY_SEP to
avoid ambiguous or colliding keys.
"""

from venuehub.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_PERMISSION,
    PLATFORM_SCOPE,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator."""
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def permission_key(business_id: str | None, user_id: str) -> str:
    """Cache key for a user's effective permission set."""
    scope = business_id or PLATFORM_SCOPE
    _validate_key_component(scope, "business_id")
    _validate_key_component(user_id, "user_id")
    return f"{CACHE_PREFIX_PERMISSION}{CACHE_KEY_SEP}{scope}{CACHE_KEY_SEP}{user_id}"


def permission_pattern(business_id: str) -> str:
    """SCAN pattern matching every cached permission set of a business."""
    _validate_key_component(business_id, "business_id")
    return f"{CACHE_PREFIX_PERMISSION}{CACHE_KEY_SEP}{business_id}{CACHE_KEY_SEP}*"
