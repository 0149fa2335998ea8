"""Unit tests for RoleService, UserService, PermissionService, and BusinessService."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from venuehub.application.dtos.common import ListQuery
from venuehub.application.services.archive_service import ArchiveService
from venuehub.application.services.business_service import BusinessService
from venuehub.application.services.permission_service import PermissionService
from venuehub.application.services.role_service import RoleService
from venuehub.application.services.user_service import UserService
from venuehub.domain.enums import RoleType
from venuehub.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BusinessRuleException,
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from venuehub.infrastructure.exceptions import DocumentExistsError
from venuehub.infrastructure.memory import MemoryDocumentStore
from venuehub.infrastructure.repositories.business_repo import BusinessRepository
from venuehub.infrastructure.repositories.permission_repo import PermissionRepository
from venuehub.infrastructure.repositories.reference_repo import ReferenceRepository
from venuehub.infrastructure.repositories.role_repo import RoleRepository
from venuehub.infrastructure.repositories.user_repo import UserRepository
from venuehub.infrastructure.services import DEFAULT_PERMISSIONS, BusinessInitializationService


@pytest.fixture
async def memory() -> MemoryDocumentStore:
    store = MemoryDocumentStore()
    await PermissionService(PermissionRepository(store)).ensure_catalog(
        list(DEFAULT_PERMISSIONS)
    )
    return store


@pytest.fixture
def auth_security() -> MagicMock:
    security = MagicMock()
    security.hash_password = AsyncMock(side_effect=lambda p: f"hashed:{p}")
    security.verify_password = AsyncMock(side_effect=lambda p, h: h == f"hashed:{p}")
    security.burn_verification = AsyncMock()
    security.create_access_token.return_value = "token"
    return security


@pytest.fixture
def repos(memory: MemoryDocumentStore) -> dict:
    return {
        "users": UserRepository(memory),
        "roles": RoleRepository(memory),
        "permissions": PermissionRepository(memory),
        "businesses": BusinessRepository(memory),
    }


@pytest.fixture
def archiver(memory: MemoryDocumentStore) -> ArchiveService:
    return ArchiveService(ReferenceRepository(memory), guarded_types={"role"})


@pytest.fixture
def business_service(repos: dict, auth_security: MagicMock, archiver: ArchiveService):
    return BusinessService(
        repos["businesses"],
        repos["users"],
        BusinessInitializationService(repos["roles"], repos["permissions"]),
        auth_security,
        archive_service=archiver,
    )


@pytest.fixture
def user_service(repos: dict, auth_security: MagicMock, archiver: ArchiveService):
    return UserService(
        repos["users"],
        repos["roles"],
        repos["permissions"],
        repos["businesses"],
        archiver,
        auth_security,
    )


@pytest.fixture
def role_service(repos: dict, archiver: ArchiveService) -> RoleService:
    return RoleService(repos["roles"], repos["permissions"], archiver)


@pytest.fixture
async def registered(business_service: BusinessService):
    return await business_service.register(
        "Lakeside Hall", "venue", "Olga", "olga@example.com", "password123"
    )


@pytest.fixture
async def platform_admin(repos: dict):
    return await repos["users"].create_user(
        None, "Platform Admin", "admin@example.com", "hashed:x", is_super_admin=True
    )


@pytest.fixture
async def manager(registered, repos: dict, user_service: UserService):
    role_id = await _role_id(repos, registered.business.id, "Manager")
    return await user_service.create_user(
        registered.business.id, registered.owner, "Max", "max@example.com", "password123",
        role_id=role_id,
    )


async def _role_id(repos: dict, business_id: str, name: str) -> str:
    role = await repos["roles"].get_active_by_name(business_id, name)
    return role.id


class TestBusinessService:
    """Registration and login."""

    async def test_register_seeds_roles_and_owner(self, registered, repos: dict) -> None:
        business_id = registered.business.id
        assert registered.business.owner_id == registered.owner.id
        assert registered.owner.role_type == RoleType.OWNER.value
        page = await repos["roles"].list(business_id, ListQuery())
        assert {r.name for r in page.items} == {"Owner", "Manager", "Staff", "Viewer"}
        owner_role = await repos["roles"].get_by_id(registered.owner.role_id)
        assert len(owner_role.permission_ids) == len(DEFAULT_PERMISSIONS)

    async def test_register_duplicate_email(self, registered, business_service) -> None:
        with pytest.raises(ConflictException):
            await business_service.register(
                "Other", "venue", "X", "OLGA@example.com", "password123"
            )

    async def test_authenticate(self, registered, business_service) -> None:
        user, token = await business_service.authenticate("olga@example.com", "password123")
        assert user.id == registered.owner.id
        assert token == "token"

    async def test_authenticate_wrong_password(self, registered, business_service) -> None:
        with pytest.raises(AuthenticationException, match="Invalid email or password"):
            await business_service.authenticate("olga@example.com", "wrong-password")

    async def test_authenticate_unknown_email_burns_time(
        self, business_service, auth_security: MagicMock
    ) -> None:
        with pytest.raises(AuthenticationException):
            await business_service.authenticate("nobody@example.com", "password123")
        auth_security.burn_verification.assert_awaited_once()

    async def test_archived_business_cannot_log_in(
        self, registered, business_service, user_service
    ) -> None:
        await business_service.archive_business(registered.business.id, "admin")
        with pytest.raises(AuthenticationException, match="Business"):
            await business_service.authenticate("olga@example.com", "password123")


class TestUserService:
    """Team membership rules."""

    async def test_create_user_takes_role_type_from_system_role(
        self, registered, repos: dict, user_service: UserService
    ) -> None:
        business_id = registered.business.id
        staff_id = await _role_id(repos, business_id, "Staff")
        user = await user_service.create_user(
            business_id, registered.owner, "Sam", "sam@example.com", "password123",
            role_id=staff_id,
        )
        assert user.role_type == "staff"
        assert user.role_id == staff_id

    async def test_role_from_other_business_not_found(
        self, registered, business_service, repos: dict, user_service: UserService
    ) -> None:
        other = await business_service.register(
            "Other", "venue", "Ola", "ola@example.com", "password123"
        )
        foreign_role = await _role_id(repos, other.business.id, "Staff")
        with pytest.raises(ResourceNotFoundException):
            await user_service.create_user(
                registered.business.id, registered.owner, "Sam", "sam@example.com",
                "password123", role_id=foreign_role,
            )

    async def test_sole_owner_cannot_be_archived(
        self, registered, platform_admin, user_service: UserService
    ) -> None:
        with pytest.raises(BusinessRuleException, match="only owner"):
            await user_service.archive_user(
                registered.business.id, registered.owner.id, platform_admin
            )

    async def test_cannot_demote_sole_owner(
        self, registered, repos: dict, user_service: UserService
    ) -> None:
        business_id = registered.business.id
        viewer = await _role_id(repos, business_id, "Viewer")
        with pytest.raises(BusinessRuleException, match="only owner"):
            await user_service.assign_role(
                business_id, registered.owner.id, registered.owner, viewer
            )

    async def test_archived_user_frees_email_then_restore_conflicts(
        self, registered, user_service: UserService
    ) -> None:
        business_id, actor = registered.business.id, registered.owner
        first = await user_service.create_user(
            business_id, actor, "Sam", "sam@example.com", "password123"
        )
        archived = await user_service.archive_user(business_id, first.id, actor)
        assert archived.is_active is False
        await user_service.create_user(business_id, actor, "Sam 2", "sam@example.com", "password123")
        with pytest.raises(ConflictException):
            await user_service.restore_user(business_id, first.id, actor)

    async def test_custom_permissions_validated(
        self, registered, user_service: UserService
    ) -> None:
        business_id, actor = registered.business.id, registered.owner
        member = await user_service.create_user(
            business_id, actor, "Sam", "sam@example.com", "password123"
        )
        with pytest.raises(ValidationException, match="Unknown permissions"):
            await user_service.set_custom_permissions(
                business_id, member.id, actor, ["nonsense.read.all"], []
            )
        updated = await user_service.set_custom_permissions(
            business_id, member.id, actor, ["finance.read.all"], ["partners.read.all"]
        )
        assert updated.granted == ("finance.read.all",)
        assert updated.revoked == ("partners.read.all",)

    async def test_bulk_archive_reports_each_id(
        self, registered, user_service: UserService
    ) -> None:
        business_id, actor = registered.business.id, registered.owner
        member = await user_service.create_user(
            business_id, actor, "Sam", "sam@example.com", "password123"
        )
        outcome = await user_service.bulk_archive(
            business_id, [member.id, actor.id, "missing"], actor
        )
        assert outcome.succeeded == [member.id]
        assert set(outcome.failed) == {actor.id, "missing"}

    async def test_permanent_delete_rules(
        self, registered, user_service: UserService
    ) -> None:
        business_id, actor = registered.business.id, registered.owner
        member = await user_service.create_user(
            business_id, actor, "Sam", "sam@example.com", "password123"
        )
        with pytest.raises(BusinessRuleException):
            await user_service.permanent_delete(business_id, member.id, actor)
        await user_service.archive_user(business_id, member.id, actor)
        await user_service.permanent_delete(business_id, member.id, actor)
        with pytest.raises(ResourceNotFoundException):
            await user_service.get_user(business_id, member.id)


    async def test_manager_cannot_grant_own_level_or_above(
        self, registered, manager, repos: dict, user_service: UserService
    ) -> None:
        business_id = registered.business.id
        for name in ("Owner", "Manager"):
            role_id = await _role_id(repos, business_id, name)
            with pytest.raises(AuthorizationException, match="own level"):
                await user_service.assign_role(business_id, manager.id, manager, role_id)
            with pytest.raises(AuthorizationException, match="own level"):
                await user_service.create_user(
                    business_id, manager, "Eve", f"eve-{name}@example.com", "password123",
                    role_id=role_id,
                )

    async def test_manager_assigns_lower_roles(
        self, registered, manager, repos: dict, user_service: UserService
    ) -> None:
        business_id = registered.business.id
        staff = await user_service.create_user(
            business_id, manager, "Sam", "sam@example.com", "password123",
            role_id=await _role_id(repos, business_id, "Staff"),
        )
        viewer = await _role_id(repos, business_id, "Viewer")
        updated = await user_service.assign_role(business_id, staff.id, manager, viewer)
        assert updated.role_type == "viewer"

    async def test_owner_account_is_off_limits_to_managers(
        self, registered, manager, repos: dict, user_service: UserService
    ) -> None:
        business_id, owner = registered.business.id, registered.owner
        viewer = await _role_id(repos, business_id, "Viewer")
        with pytest.raises(AuthorizationException) as exc_info:
            await user_service.assign_role(business_id, owner.id, manager, viewer)
        assert exc_info.value.details["role_types"] == ["owner"]
        with pytest.raises(AuthorizationException):
            await user_service.reset_password(business_id, owner.id, manager, "takeover-123")
        with pytest.raises(AuthorizationException):
            await user_service.set_custom_permissions(
                business_id, owner.id, manager, [], ["users.read.all"]
            )
        with pytest.raises(AuthorizationException):
            await user_service.update_user(
                business_id, owner.id, manager, {"email": "max@example.com"}
            )

    async def test_super_admin_may_change_owner(
        self, registered, platform_admin, user_service: UserService
    ) -> None:
        await user_service.reset_password(
            registered.business.id, registered.owner.id, platform_admin, "new-password-1"
        )


class TestRoleService:
    """Custom roles and system-role protection."""

    async def test_create_and_duplicate_name(
        self, registered, role_service: RoleService
    ) -> None:
        business_id, actor = registered.business.id, registered.owner.id
        role = await role_service.create_role(
            business_id, actor, "Crew", permission_ids=["events.read.all", "events.read.all"]
        )
        assert role.permission_ids == ("events.read.all",)
        with pytest.raises(ConflictException):
            await role_service.create_role(business_id, actor, "crew")

    async def test_unknown_permission_rejected(
        self, registered, role_service: RoleService
    ) -> None:
        with pytest.raises(ValidationException):
            await role_service.create_role(
                registered.business.id, registered.owner.id, "Crew", permission_ids=["x.y.z"]
            )

    async def test_owner_role_cannot_be_archived(
        self, registered, role_service: RoleService
    ) -> None:
        with pytest.raises(BusinessRuleException):
            await role_service.archive_role(
                registered.business.id, registered.owner.role_id, registered.owner.id
            )

    async def test_role_in_use_blocks_archive(
        self, registered, role_service: RoleService, user_service: UserService
    ) -> None:
        business_id, actor = registered.business.id, registered.owner.id
        role = await role_service.create_role(business_id, actor, "Crew")
        await user_service.create_user(
            business_id, registered.owner, "Sam", "sam@example.com", "password123", role_id=role.id
        )
        with pytest.raises(Exception) as exc_info:
            await role_service.archive_role(business_id, role.id, actor)
        assert exc_info.value.error_code == "ARCHIVE_BLOCKED"

    async def test_archived_role_name_reusable_and_restore_conflicts(
        self, registered, role_service: RoleService
    ) -> None:
        business_id, actor = registered.business.id, registered.owner.id
        role = await role_service.create_role(business_id, actor, "Crew")
        await role_service.archive_role(business_id, role.id, actor)
        await role_service.create_role(business_id, actor, "Crew")
        with pytest.raises(ConflictException):
            await role_service.restore_role(business_id, role.id, actor)

    async def test_system_role_rename_rejected(
        self, registered, repos: dict, role_service: RoleService
    ) -> None:
        business_id = registered.business.id
        staff = await _role_id(repos, business_id, "Staff")
        with pytest.raises(BusinessRuleException, match="renamed"):
            await role_service.update_role(
                business_id, staff, registered.owner.id, name="Crew"
            )

    async def test_permission_change_invalidates_business_cache(
        self, registered, repos: dict, archiver: ArchiveService
    ) -> None:
        authorization = AsyncMock()
        service = RoleService(repos["roles"], repos["permissions"], archiver, authorization)
        business_id = registered.business.id
        staff = await _role_id(repos, business_id, "Staff")
        await service.update_role(
            business_id, staff, registered.owner.id, permission_ids=["events.read.all"]
        )
        authorization.invalidate_business.assert_awaited_once_with(business_id)


class TestPermissionService:
    """Catalog management."""

    async def test_catalog_grouped_by_module(self, memory: MemoryDocumentStore) -> None:
        service = PermissionService(PermissionRepository(memory))
        groups = await service.list_catalog()
        modules = [g.module for g in groups]
        assert modules == sorted(modules)
        assert all(p.module == g.module for g in groups for p in g.permissions)

    async def test_duplicate_triple_conflicts(self, memory: MemoryDocumentStore) -> None:
        service = PermissionService(
            PermissionRepository(memory), duplicate_errors=(DocumentExistsError,)
        )
        with pytest.raises(ConflictException):
            await service.create_permission("events", "read", "all", "Read events")

    async def test_ensure_catalog_is_idempotent(self, memory: MemoryDocumentStore) -> None:
        service = PermissionService(PermissionRepository(memory))
        assert await service.ensure_catalog(list(DEFAULT_PERMISSIONS)) == 0

    async def test_blank_display_name_rejected(self, memory: MemoryDocumentStore) -> None:
        service = PermissionService(PermissionRepository(memory))
        with pytest.raises(ValidationException):
            await service.create_permission("events", "read", "own", "  ")
