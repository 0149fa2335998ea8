"""User application service: team members of a business.

Owner accounts can only be changed by owners (or a super-admin), and a
non-owner can only hand out roles below their own role level.
"""

from __future__ import annotations

import logging
from typing import Any

from venuehub.application.dtos.activity import ActivityLogResult
from venuehub.application.dtos.common import ArchiveCounts, ListQuery, Page
from venuehub.application.dtos.role import RoleResult
from venuehub.application.dtos.user import BulkOutcome, UserResult
from venuehub.application.interfaces.repositories import (
    IActivityLogRepository,
    IBusinessRepository,
    IPermissionRepository,
    IRoleRepository,
    IUserRepository,
)
from venuehub.application.interfaces.services import IActivityLogger, IAuthSecurity
from venuehub.application.services.archive_policy import USER_POLICY
from venuehub.application.services.archive_service import ArchiveService
from venuehub.application.services.authorization_service import AuthorizationService
from venuehub.domain.entities.archivable import ArchiveState
from venuehub.domain.entities.user import UserEntity
from venuehub.domain.enums import RoleType
from venuehub.domain.exceptions import (
    AuthorizationException,
    BusinessRuleException,
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
    VenueHubException,
)
from venuehub.domain.value_objects import CustomPermissions
from venuehub.shared.enums import ActivityAction
from venuehub.shared.utils.text import normalize_key

logger = logging.getLogger(__name__)


def _to_entity(user: UserResult) -> UserEntity:
    return UserEntity(
        id=user.id,
        business_id=user.business_id,
        email=user.email,
        role_type=RoleType(user.role_type),
        is_super_admin=user.is_super_admin,
        is_active=user.is_active,
        archive=ArchiveState(user.is_archived, user.archived_at, user.archived_by),
    )


def _acts_as_owner(actor: UserResult) -> bool:
    return actor.is_super_admin or actor.role_type == RoleType.OWNER.value


def role_type_hint(role: RoleResult | None) -> RoleType:
    """Coarse role type implied by a role: seeded roles map by name, others are custom."""
    if role is None:
        return RoleType.VIEWER
    if role.is_system:
        try:
            return RoleType(role.name.lower())
        except ValueError:
            return RoleType.CUSTOM
    return RoleType.CUSTOM


class UserService:
    """Manage users of a business: profile, role, grants, archive lifecycle."""

    def __init__(
        self,
        user_repo: IUserRepository,
        role_repo: IRoleRepository,
        permission_repo: IPermissionRepository,
        business_repo: IBusinessRepository,
        archive_service: ArchiveService,
        auth_security: IAuthSecurity,
        authorization: AuthorizationService | None = None,
        activity_logger: IActivityLogger | None = None,
        activity_repo: IActivityLogRepository | None = None,
    ) -> None:
        self._user_repo = user_repo
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._business_repo = business_repo
        self._archive = archive_service
        self._auth_security = auth_security
        self._authorization = authorization
        self._activity = activity_logger
        self._activity_repo = activity_repo

    async def _log(
        self,
        business_id: str,
        actor_id: str,
        action: ActivityAction,
        user_id: str,
        details: str = "",
        metadata: dict[str, Any] | None = None,
    ) -> None:
        if self._activity is not None:
            await self._activity.log(
                business_id, actor_id, action, "user", user_id, details, metadata
            )

    async def _invalidate(self, user_id: str, business_id: str) -> None:
        if self._authorization is not None:
            await self._authorization.invalidate_user(user_id, business_id)

    async def _active_role(self, business_id: str, role_id: str) -> RoleResult:
        role = await self._role_repo.get_by_id_and_business(role_id, business_id)
        if role is None:
            raise ResourceNotFoundException("role", role_id)
        if role.is_archived:
            raise ValidationException("Cannot assign an archived role", field="role_id")
        return role

    async def _ensure_email_free(self, email: str, exclude_id: str | None = None) -> None:
        if await self._user_repo.exists_active(
            "email_lower", normalize_key(email), None, exclude_id
        ):
            raise ConflictException("user", "email", email)

    @staticmethod
    def _ensure_can_manage(actor: UserResult, target: UserResult) -> None:
        """Only owners (or a super-admin) may change an owner account."""
        if target.role_type == RoleType.OWNER.value and not _acts_as_owner(actor):
            raise AuthorizationException(role_types=[RoleType.OWNER.value])

    async def _ensure_can_grant(
        self, business_id: str, actor: UserResult, role: RoleResult
    ) -> None:
        """A non-owner can only hand out roles below their own level."""
        if _acts_as_owner(actor):
            return
        own = None
        if actor.role_id:
            own = await self._role_repo.get_by_id_and_business(actor.role_id, business_id)
        own_level = own.level if own is not None and not own.is_archived else 0
        if role.level >= own_level:
            raise AuthorizationException(
                message="Cannot assign a role at or above your own level"
            )

    async def list_users(self, business_id: str, query: ListQuery) -> Page[UserResult]:
        return await self._user_repo.list(business_id, query)

    async def get_user(self, business_id: str, user_id: str) -> UserResult:
        user = await self._user_repo.get_by_id_and_business(user_id, business_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user

    async def stats(self, business_id: str) -> ArchiveCounts:
        return await self._user_repo.archive_counts(business_id)

    async def create_user(
        self,
        business_id: str,
        actor: UserResult,
        name: str,
        email: str,
        password: str,
        *,
        role_id: str | None = None,
        phone: str | None = None,
    ) -> UserResult:
        """Add a user to the business; the coarse role type follows the role.

        Raises:
            ConflictException: Email already used by an active user.
            ResourceNotFoundException: Role not found in this business.
            ValidationException: Role is archived.
            AuthorizationException: Role is at or above the actor's own level.
        """
        await self._ensure_email_free(email)
        role = await self._active_role(business_id, role_id) if role_id else None
        if role is not None:
            await self._ensure_can_grant(business_id, actor, role)
        hashed = await self._auth_security.hash_password(password)
        created = await self._user_repo.create_user(
            business_id,
            name,
            email,
            hashed,
            role_id=role_id,
            role_type=role_type_hint(role).value,
            phone=phone,
            invited_by=actor.id,
        )
        logger.info("User created: %s in %s", created.id, business_id)
        await self._log(business_id, actor.id, ActivityAction.CREATED, created.id, "user created")
        return created

    async def update_user(
        self,
        business_id: str,
        user_id: str,
        actor: UserResult,
        changes: dict[str, Any],
    ) -> UserResult:
        """Update profile fields (name, email, phone)."""
        user = await self.get_user(business_id, user_id)
        self._ensure_can_manage(actor, user)
        if user.is_archived:
            raise BusinessRuleException(
                "Cannot update an archived user", rule="archived_readonly"
            )
        allowed = {k: v for k, v in changes.items() if k in ("name", "email", "phone")}
        if not allowed:
            return user
        if "email" in allowed and normalize_key(allowed["email"]) != normalize_key(user.email):
            await self._ensure_email_free(allowed["email"], exclude_id=user_id)
        updated = await self._user_repo.update_user(user_id, allowed)
        await self._log(
            business_id,
            actor.id,
            ActivityAction.UPDATED,
            user_id,
            "user updated",
            {"fields": sorted(allowed)},
        )
        return updated

    async def assign_role(
        self,
        business_id: str,
        user_id: str,
        actor: UserResult,
        role_id: str,
    ) -> UserResult:
        """Give the user a role and the coarse type that goes with it.

        Raises:
            AuthorizationException: Target is an owner and the actor is not, or
                the role is at or above the actor's own level.
            BusinessRuleException: Demoting the only active owner.
        """
        user = await self.get_user(business_id, user_id)
        self._ensure_can_manage(actor, user)
        if user.is_archived:
            raise BusinessRuleException(
                "Cannot change the role of an archived user", rule="archived_readonly"
            )
        role = await self._active_role(business_id, role_id)
        await self._ensure_can_grant(business_id, actor, role)
        new_type = role_type_hint(role)
        if user.role_type == RoleType.OWNER.value and new_type != RoleType.OWNER:
            if await self._user_repo.count_active_owners(business_id) <= 1:
                raise BusinessRuleException(
                    "Cannot change the role of the only owner", rule="sole_owner"
                )
        updated = await self._user_repo.update_user(
            user_id, {"role_id": role.id, "role_type": new_type.value}
        )
        await self._invalidate(user_id, business_id)
        await self._log(
            business_id,
            actor.id,
            ActivityAction.ROLE_ASSIGNED,
            user_id,
            f"role set to {role.name}",
            {"role_id": role.id, "role_type": new_type.value},
        )
        return updated

    async def set_custom_permissions(
        self,
        business_id: str,
        user_id: str,
        actor: UserResult,
        granted: list[str],
        revoked: list[str],
    ) -> UserResult:
        """Replace the user's granted and revoked lists (revoked wins on overlap).

        Raises:
            AuthorizationException: Target is an owner and the actor is not.
            ValidationException: A name is not in the catalog.
        """
        user = await self.get_user(business_id, user_id)
        self._ensure_can_manage(actor, user)
        names = list(dict.fromkeys([*granted, *revoked]))
        found = await self._permission_repo.get_many(names)
        missing = [n for n in names if n not in found]
        if missing:
            raise ValidationException(
                f"Unknown permissions: {', '.join(missing)}", field="permissions"
            )
        custom = CustomPermissions.from_lists(granted, revoked)
        updated = await self._user_repo.update_user(
            user.id, {"custom_permissions": custom.to_dict()}
        )
        await self._invalidate(user_id, business_id)
        await self._log(
            business_id,
            actor.id,
            ActivityAction.PERMISSIONS_CHANGED,
            user_id,
            "custom permissions changed",
            custom.to_dict(),
        )
        return updated

    async def archive_user(self, business_id: str, user_id: str, actor: UserResult) -> UserResult:
        """Archive a user (deactivates login).

        Raises:
            AuthorizationException: Target is an owner and the actor is not.
            BusinessRuleException: Self-archive or the only active owner.
            AlreadyArchivedException: Already archived.
        """
        user = await self.get_user(business_id, user_id)
        self._ensure_can_manage(actor, user)
        if not user.is_archived:
            owners = await self._user_repo.count_active_owners(business_id)
            _to_entity(user).ensure_can_be_archived(actor.id, owners)
        archived = await self._archive.archive(
            USER_POLICY, self._user_repo, user_id, business_id, actor.id
        )
        await self._invalidate(user_id, business_id)
        return archived

    async def restore_user(self, business_id: str, user_id: str, actor: UserResult) -> UserResult:
        """Restore a user; ConflictException if the email now belongs to an active user."""
        self._ensure_can_manage(actor, await self.get_user(business_id, user_id))
        restored = await self._archive.restore(
            USER_POLICY, self._user_repo, user_id, business_id, actor.id
        )
        await self._invalidate(user_id, business_id)
        return restored

    async def permanent_delete(self, business_id: str, user_id: str, actor: UserResult) -> None:
        """Delete an archived, non-owner user for good."""
        user = await self.get_user(business_id, user_id)
        business = await self._business_repo.get_by_id(business_id)
        _to_entity(user).ensure_can_be_deleted(business.owner_id if business else None)
        await self._user_repo.delete(user_id)
        logger.info("User permanently deleted: %s by %s", user_id, actor.id)
        await self._log(
            business_id, actor.id, ActivityAction.DELETED, user_id, f"user {user.email} deleted"
        )

    async def bulk_archive(
        self, business_id: str, user_ids: list[str], actor: UserResult
    ) -> BulkOutcome:
        """Archive each id independently; failures are reported, not raised."""
        outcome = BulkOutcome(succeeded=[], failed={})
        for user_id in dict.fromkeys(user_ids):
            try:
                await self.archive_user(business_id, user_id, actor)
            except VenueHubException as e:
                outcome.failed[user_id] = e.message
            else:
                outcome.succeeded.append(user_id)
        return outcome

    async def bulk_restore(
        self, business_id: str, user_ids: list[str], actor: UserResult
    ) -> BulkOutcome:
        """Restore each id independently; failures are reported, not raised."""
        outcome = BulkOutcome(succeeded=[], failed={})
        for user_id in dict.fromkeys(user_ids):
            try:
                await self.restore_user(business_id, user_id, actor)
            except VenueHubException as e:
                outcome.failed[user_id] = e.message
            else:
                outcome.succeeded.append(user_id)
        return outcome

    async def reset_password(
        self, business_id: str, user_id: str, actor: UserResult, new_password: str
    ) -> None:
        """Set a new password for a user of the business."""
        user = await self.get_user(business_id, user_id)
        self._ensure_can_manage(actor, user)
        if user.is_archived:
            raise BusinessRuleException(
                "Cannot reset the password of an archived user", rule="archived_readonly"
            )
        hashed = await self._auth_security.hash_password(new_password)
        await self._user_repo.update_user(user_id, {"hashed_password": hashed})
        await self._log(
            business_id, actor.id, ActivityAction.PASSWORD_RESET, user_id, "password reset"
        )

    async def get_activity(
        self, business_id: str, user_id: str, skip: int = 0, limit: int = 50
    ) -> list[ActivityLogResult]:
        """Recent activity of a user of the business (newest first)."""
        await self.get_user(business_id, user_id)
        if self._activity_repo is None:
            return []
        return await self._activity_repo.list_for_user(business_id, user_id, skip, limit)
