"""Redis cache service."""

from venuehub.infrastructure.cache.redis_cache import CacheService

__all__ = ["CacheService"]
