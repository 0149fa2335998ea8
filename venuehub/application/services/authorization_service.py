"""Authorization service: permission checks with caching.

Two cache levels: a per-instance memo (one instance per request) and an
optional shared cache keyed by business and user.
"""

from __future__ import annotations

import logging

from venuehub.application.dtos.user import UserResult
from venuehub.application.interfaces.services import ICacheService
from venuehub.application.services.permission_resolver import PermissionResolver
from venuehub.core.cache_keys import permission_key, permission_pattern
from venuehub.domain.enums import RoleType
from venuehub.domain.exceptions import AuthorizationException
from venuehub.shared.telemetry.telemetry import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class AuthorizationService:
    """Centralized permission checking; uses cache when available."""

    def __init__(
        self,
        permission_resolver: PermissionResolver,
        cache: ICacheService | None = None,
        cache_ttl: int = 300,
    ) -> None:
        self.permission_resolver = permission_resolver
        self.cache = cache
        self.cache_ttl = cache_ttl
        self._memo: dict[str, frozenset[str]] = {}

    def _cache_ready(self) -> bool:
        return self.cache is not None and self.cache.is_available()

    async def get_effective_permissions(self, user: UserResult) -> frozenset[str]:
        """Return the user's effective permission names (memoized, then cached)."""
        if user.id in self._memo:
            return self._memo[user.id]
        key = permission_key(user.business_id, user.id)
        if self._cache_ready():
            assert self.cache is not None
            cached = await self.cache.get(key)
            if cached is not None:
                self._memo[user.id] = frozenset(cached)
                return self._memo[user.id]
        with tracer.start_as_current_span("authorization.resolve_permissions") as span:
            span.set_attribute("user.id", user.id)
            permissions = await self.permission_resolver.resolve_effective_permissions(user)
            span.set_attribute("permissions.count", len(permissions))
        if self._cache_ready():
            assert self.cache is not None
            await self.cache.set(key, sorted(permissions), ttl=self.cache_ttl)
        self._memo[user.id] = permissions
        return permissions

    async def has_permission(self, user: UserResult, name: str) -> bool:
        """Return True if user holds name (super-admins always do)."""
        if user.is_super_admin:
            return True
        effective = await self.get_effective_permissions(user)
        return await self.permission_resolver.has_permission(user, name, effective)

    async def require_permission(self, user: UserResult, name: str) -> None:
        """Raise AuthorizationException if user lacks the permission."""
        if not await self.has_permission(user, name):
            logger.info("Permission denied: user=%s permission=%s", user.id, name)
            raise AuthorizationException(permission=name)

    def require_role_type(self, user: UserResult, role_types: list[RoleType]) -> None:
        """Raise AuthorizationException unless the user's coarse role type is accepted."""
        if user.is_super_admin:
            return
        accepted = [r.value for r in role_types]
        if user.role_type not in accepted:
            raise AuthorizationException(role_types=accepted)

    async def invalidate_user(self, user_id: str, business_id: str | None) -> None:
        """Drop cached permissions for one user (role or grants changed)."""
        self._memo.pop(user_id, None)
        if self._cache_ready():
            assert self.cache is not None
            await self.cache.delete(permission_key(business_id, user_id))

    async def invalidate_business(self, business_id: str) -> None:
        """Drop cached permissions of every user of a business (role permissions changed)."""
        self._memo.clear()
        if self._cache_ready():
            assert self.cache is not None
            await self.cache.delete_pattern(permission_pattern(business_id))
