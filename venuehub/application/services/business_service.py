"""Business (tenant) service: registration, login, and the current business."""

from __future__ import annotations

import logging
from typing import Any

from venuehub.application.dtos.business import BusinessResult, RegistrationResult
from venuehub.application.dtos.user import UserResult
from venuehub.application.interfaces.repositories import IBusinessRepository, IUserRepository
from venuehub.application.interfaces.services import (
    IActivityLogger,
    IAuthSecurity,
    IBusinessInitializationService,
)
from venuehub.application.services.archive_policy import BUSINESS_POLICY
from venuehub.application.services.archive_service import ArchiveService
from venuehub.domain.entities.role import OWNER_ROLE_NAME
from venuehub.domain.enums import RoleType
from venuehub.domain.exceptions import (
    AuthenticationException,
    BusinessRuleException,
    ConflictException,
    ResourceNotFoundException,
)
from venuehub.shared.enums import ActivityAction
from venuehub.shared.utils.text import normalize_key

logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS = "Invalid email or password"
_UPDATABLE_FIELDS = ("name", "category", "email", "phone", "description")


class BusinessService:
    """Creates businesses with their owner, authenticates users, manages the tenant."""

    def __init__(
        self,
        business_repo: IBusinessRepository,
        user_repo: IUserRepository,
        init_service: IBusinessInitializationService,
        auth_security: IAuthSecurity,
        archive_service: ArchiveService | None = None,
        activity_logger: IActivityLogger | None = None,
    ) -> None:
        self.business_repo = business_repo
        self.user_repo = user_repo
        self.init_service = init_service
        self.auth_security = auth_security
        self.archive_service = archive_service
        self.activity_logger = activity_logger

    def issue_token(self, user: UserResult) -> str:
        return self.auth_security.create_access_token(
            {"sub": user.id, "business_id": user.business_id}
        )

    async def register(
        self,
        business_name: str,
        category: str,
        owner_name: str,
        email: str,
        password: str,
        phone: str | None = None,
    ) -> RegistrationResult:
        """Create a business, its default roles, and its owner account.

        Raises:
            ConflictException: Email already used by an active user.
        """
        if await self.user_repo.exists_active("email_lower", normalize_key(email), None):
            raise ConflictException("user", "email", email)
        business = await self.business_repo.create_business(
            business_name, category, email=email, phone=phone
        )
        roles = await self.init_service.initialize_business_roles(business.id)
        hashed = await self.auth_security.hash_password(password)
        owner = await self.user_repo.create_user(
            business.id,
            owner_name,
            email,
            hashed,
            role_id=roles[OWNER_ROLE_NAME].id,
            role_type=RoleType.OWNER.value,
            phone=phone,
        )
        business = await self.business_repo.update_business(
            business.id, {"owner_id": owner.id}
        )
        logger.info("Business registered: %s (%s)", business.name, business.id)
        if self.activity_logger is not None:
            await self.activity_logger.log(
                business.id,
                owner.id,
                ActivityAction.REGISTERED,
                "business",
                business.id,
                details=f"business {business.name} registered",
            )
        return RegistrationResult(
            business=business, owner=owner, access_token=self.issue_token(owner)
        )

    async def authenticate(self, email: str, password: str) -> tuple[UserResult, str]:
        """Check credentials of an active, non-archived user; return user and token.

        Raises:
            AuthenticationException: Unknown email, wrong password, or inactive account.
        """
        found = await self.user_repo.get_by_email(email)
        if found is None:
            await self.auth_security.burn_verification(password)
            raise AuthenticationException(_INVALID_CREDENTIALS)
        user, hashed = found
        if not await self.auth_security.verify_password(password, hashed):
            raise AuthenticationException(_INVALID_CREDENTIALS)
        if not user.is_active or user.is_archived:
            raise AuthenticationException("Account is disabled")
        if user.business_id is not None:
            business = await self.business_repo.get_by_id(user.business_id)
            if business is None or business.is_archived or not business.is_active:
                raise AuthenticationException("Business is not active")
        await self.user_repo.touch_last_login(user.id)
        if self.activity_logger is not None:
            await self.activity_logger.log(
                user.business_id, user.id, ActivityAction.LOGIN, "user", user.id, "login"
            )
        return user, self.issue_token(user)

    async def get_current(self, business_id: str) -> BusinessResult:
        business = await self.business_repo.get_by_id(business_id)
        if business is None:
            raise ResourceNotFoundException("business", business_id)
        return business

    async def update_current(
        self, business_id: str, actor_id: str, changes: dict[str, Any]
    ) -> BusinessResult:
        """Update profile fields of the business."""
        business = await self.get_current(business_id)
        if business.is_archived:
            raise BusinessRuleException(
                "Cannot update an archived business", rule="archived_readonly"
            )
        allowed = {k: v for k, v in changes.items() if k in _UPDATABLE_FIELDS}
        if not allowed:
            return business
        updated = await self.business_repo.update_business(business_id, allowed)
        if self.activity_logger is not None:
            await self.activity_logger.log(
                business_id,
                actor_id,
                ActivityAction.UPDATED,
                "business",
                business_id,
                "business updated",
                {"fields": sorted(allowed)},
            )
        return updated

    def _archiver(self) -> ArchiveService:
        if self.archive_service is None:
            raise RuntimeError("BusinessService was built without an ArchiveService")
        return self.archive_service

    async def archive_business(self, business_id: str, actor_id: str) -> BusinessResult:
        """Archive a business (platform administration)."""
        return await self._archiver().archive(
            BUSINESS_POLICY, self.business_repo, business_id, None, actor_id
        )

    async def restore_business(self, business_id: str, actor_id: str) -> BusinessResult:
        """Restore a business (platform administration)."""
        return await self._archiver().restore(
            BUSINESS_POLICY, self.business_repo, business_id, None, actor_id
        )
