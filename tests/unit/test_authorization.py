"""Unit tests for PermissionResolver and AuthorizationService (mocked repos and cache)."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from venuehub.application.dtos.permission import PermissionResult
from venuehub.application.dtos.role import RoleResult
from venuehub.application.dtos.user import UserResult
from venuehub.application.services.authorization_service import AuthorizationService
from venuehub.application.services.permission_resolver import PermissionResolver
from venuehub.core.cache_keys import permission_key
from venuehub.domain.enums import RoleType
from venuehub.domain.exceptions import AuthorizationException


def _user(**overrides) -> UserResult:
    values = {
        "id": "u1",
        "business_id": "b1",
        "name": "Ana",
        "email": "ana@example.com",
        "role_id": "r1",
        "role_type": "staff",
        "is_super_admin": False,
        "is_active": True,
        "granted": (),
        "revoked": (),
        "is_archived": False,
    }
    values.update(overrides)
    return UserResult(**values)


def _role(permission_ids: tuple[str, ...], is_archived: bool = False) -> RoleResult:
    return RoleResult(
        id="r1",
        business_id="b1",
        name="Staff",
        description="",
        permission_ids=permission_ids,
        is_system=True,
        level=50,
        is_archived=is_archived,
        archived_at=None,
        archived_by=None,
    )


def _permission(name: str, is_active: bool = True) -> PermissionResult:
    module, action, scope = name.split(".")
    return PermissionResult(
        id=name,
        name=name,
        module=module,
        action=action,
        scope=scope,
        display_name=name,
        description="",
        is_active=is_active,
    )


def _catalog(*names: str, inactive: tuple[str, ...] = ()) -> AsyncMock:
    entries = {n: _permission(n) for n in names}
    entries.update({n: _permission(n, is_active=False) for n in inactive})
    repo = AsyncMock()
    repo.get_by_name.side_effect = lambda name: entries.get(name)
    repo.list_all.return_value = [p for p in entries.values() if p.is_active]
    return repo


@pytest.fixture
def role_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id_and_business.return_value = _role(
        ("partners.read.all", "partners.create.all")
    )
    return repo


@pytest.fixture
def permission_repo() -> AsyncMock:
    return _catalog(
        "partners.read.all",
        "partners.create.all",
        "finance.read.all",
        inactive=("supplies.read.all",),
    )


class TestPermissionResolver:
    """Effective permission resolution and has_permission."""

    async def test_role_permissions_plus_grants_minus_revokes(
        self, role_repo: AsyncMock, permission_repo: AsyncMock
    ) -> None:
        resolver = PermissionResolver(role_repo, permission_repo)
        user = _user(granted=("finance.read.all",), revoked=("partners.create.all",))
        effective = await resolver.resolve_effective_permissions(user)
        assert effective == frozenset({"partners.read.all", "finance.read.all"})

    async def test_manager_with_grant_and_revoke(self) -> None:
        """A revoked role permission is not held even though the role carries it."""
        role_repo = AsyncMock()
        role_repo.get_by_id_and_business.return_value = _role(
            ("events.read.all", "events.update.own")
        )
        catalog = _catalog("events.read.all", "events.update.own", "finance.read.all")
        resolver = PermissionResolver(role_repo, catalog)
        user = _user(
            role_type="manager",
            granted=("finance.read.all",),
            revoked=("events.update.own",),
        )

        effective = await resolver.resolve_effective_permissions(user)

        assert effective == frozenset({"events.read.all", "finance.read.all"})
        assert await resolver.has_permission(user, "events.update.own") is False
        assert await resolver.has_permission(user, "events.read.all") is True
        assert await resolver.has_permission(user, "finance.read.all") is True

    async def test_archived_role_grants_nothing(self, permission_repo: AsyncMock) -> None:
        role_repo = AsyncMock()
        role_repo.get_by_id_and_business.return_value = _role(
            ("partners.read.all",), is_archived=True
        )
        resolver = PermissionResolver(role_repo, permission_repo)
        assert await resolver.resolve_effective_permissions(_user()) == frozenset()

    async def test_user_without_role_has_only_grants(
        self, role_repo: AsyncMock, permission_repo: AsyncMock
    ) -> None:
        resolver = PermissionResolver(role_repo, permission_repo)
        user = _user(role_id=None, granted=("finance.read.all",))
        assert await resolver.resolve_effective_permissions(user) == {"finance.read.all"}
        role_repo.get_by_id_and_business.assert_not_called()

    async def test_unknown_name_never_held(
        self, role_repo: AsyncMock, permission_repo: AsyncMock
    ) -> None:
        """A granted name that is not in the catalog is still not held."""
        resolver = PermissionResolver(role_repo, permission_repo)
        user = _user(granted=("events.read.all",))
        assert await resolver.has_permission(user, "events.read.all") is False

    async def test_inactive_name_never_held(
        self, role_repo: AsyncMock, permission_repo: AsyncMock
    ) -> None:
        resolver = PermissionResolver(role_repo, permission_repo)
        user = _user(granted=("supplies.read.all",))
        assert await resolver.has_permission(user, "supplies.read.all") is False

    async def test_super_admin_holds_everything(
        self, role_repo: AsyncMock, permission_repo: AsyncMock
    ) -> None:
        resolver = PermissionResolver(role_repo, permission_repo)
        admin = _user(is_super_admin=True, business_id=None, role_id=None)
        assert await resolver.has_permission(admin, "anything.at.all") is True
        effective = await resolver.resolve_effective_permissions(admin)
        assert effective == {"partners.read.all", "partners.create.all", "finance.read.all"}


class TestAuthorizationService:
    """Memo, shared cache, and require_* checks."""

    async def test_memoizes_per_instance(
        self, role_repo: AsyncMock, permission_repo: AsyncMock
    ) -> None:
        service = AuthorizationService(PermissionResolver(role_repo, permission_repo))
        user = _user()
        assert await service.has_permission(user, "partners.read.all")
        assert await service.has_permission(user, "partners.create.all")
        assert role_repo.get_by_id_and_business.await_count == 1

    async def test_cache_hit_skips_resolution(self, permission_repo: AsyncMock) -> None:
        resolver = MagicMock(spec=PermissionResolver)
        resolver.resolve_effective_permissions = AsyncMock()
        cache = MagicMock()
        cache.is_available.return_value = True
        cache.get = AsyncMock(return_value=["partners.read.all"])
        service = AuthorizationService(resolver, cache=cache)

        effective = await service.get_effective_permissions(_user())

        assert effective == frozenset({"partners.read.all"})
        cache.get.assert_awaited_once_with(permission_key("b1", "u1"))
        resolver.resolve_effective_permissions.assert_not_called()

    async def test_cache_miss_stores_sorted_list(
        self, role_repo: AsyncMock, permission_repo: AsyncMock
    ) -> None:
        cache = MagicMock()
        cache.is_available.return_value = True
        cache.get = AsyncMock(return_value=None)
        cache.set = AsyncMock(return_value=True)
        service = AuthorizationService(
            PermissionResolver(role_repo, permission_repo), cache=cache, cache_ttl=60
        )

        await service.get_effective_permissions(_user())

        cache.set.assert_awaited_once_with(
            permission_key("b1", "u1"),
            ["partners.create.all", "partners.read.all"],
            ttl=60,
        )

    async def test_unavailable_cache_is_ignored(
        self, role_repo: AsyncMock, permission_repo: AsyncMock
    ) -> None:
        cache = MagicMock()
        cache.is_available.return_value = False
        cache.get = AsyncMock()
        service = AuthorizationService(
            PermissionResolver(role_repo, permission_repo), cache=cache
        )
        assert await service.has_permission(_user(), "partners.read.all")
        cache.get.assert_not_called()

    async def test_require_permission_raises(
        self, role_repo: AsyncMock, permission_repo: AsyncMock
    ) -> None:
        service = AuthorizationService(PermissionResolver(role_repo, permission_repo))
        with pytest.raises(AuthorizationException) as exc_info:
            await service.require_permission(_user(), "finance.read.all")
        assert exc_info.value.details == {"permission": "finance.read.all"}

    async def test_invalidate_user_drops_memo(
        self, role_repo: AsyncMock, permission_repo: AsyncMock
    ) -> None:
        service = AuthorizationService(PermissionResolver(role_repo, permission_repo))
        user = _user()
        await service.get_effective_permissions(user)
        await service.invalidate_user(user.id, user.business_id)
        await service.get_effective_permissions(user)
        assert role_repo.get_by_id_and_business.await_count == 2

    def test_require_role_type(self, role_repo: AsyncMock, permission_repo: AsyncMock) -> None:
        service = AuthorizationService(PermissionResolver(role_repo, permission_repo))
        service.require_role_type(_user(role_type="owner"), [RoleType.OWNER])
        service.require_role_type(_user(is_super_admin=True), [RoleType.OWNER])
        with pytest.raises(AuthorizationException):
            service.require_role_type(_user(), [RoleType.OWNER, RoleType.MANAGER])
