"""User repository (archivable; email unique across the platform)."""

from __future__ import annotations

from typing import Any

from venuehub.application.dtos.user import UserResult
from venuehub.core.constants import COLLECTION_USERS
from venuehub.domain.enums import RoleType
from venuehub.infrastructure.repositories.base import DocumentRepository
from venuehub.shared.utils.datetime import utc_now
from venuehub.shared.utils.text import normalize_key


class UserRepository(DocumentRepository[UserResult]):
    """User accounts. email_lower backs uniqueness; name_lower backs search."""

    collection_name = COLLECTION_USERS
    resource_type = "user"
    search_field = "name_lower"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> UserResult:
        custom = data.get("custom_permissions") or {}
        return UserResult(
            id=doc_id,
            business_id=data.get("business_id"),
            name=data.get("name", ""),
            email=data.get("email", ""),
            role_id=data.get("role_id"),
            role_type=data.get("role_type", RoleType.VIEWER.value),
            is_super_admin=data.get("is_super_admin", False),
            is_active=data.get("is_active", True),
            granted=tuple(custom.get("granted") or ()),
            revoked=tuple(custom.get("revoked") or ()),
            is_archived=data.get("is_archived", False),
            archived_at=data.get("archived_at"),
            archived_by=data.get("archived_by"),
            phone=data.get("phone"),
            last_login_at=data.get("last_login_at"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    async def create_user(
        self,
        business_id: str | None,
        name: str,
        email: str,
        hashed_password: str,
        *,
        role_id: str | None = None,
        role_type: str = RoleType.VIEWER.value,
        is_super_admin: bool = False,
        phone: str | None = None,
        invited_by: str | None = None,
    ) -> UserResult:
        """Create user with an already hashed password; uniqueness is checked by the caller."""
        return await self.insert(
            {
                "business_id": business_id,
                "name": name.strip(),
                "name_lower": normalize_key(name),
                "email": email.strip(),
                "email_lower": normalize_key(email),
                "hashed_password": hashed_password,
                "role_id": role_id,
                "role_type": role_type,
                "is_super_admin": is_super_admin,
                "is_active": True,
                "custom_permissions": {"granted": [], "revoked": []},
                "phone": phone,
                "invited_by": invited_by,
                "last_login_at": None,
            }
        )

    async def update_user(self, user_id: str, changes: dict[str, Any]) -> UserResult:
        """Apply changes; keeps name_lower/email_lower in step."""
        payload = dict(changes)
        if "name" in payload:
            payload["name"] = payload["name"].strip()
            payload["name_lower"] = normalize_key(payload["name"])
        if "email" in payload:
            payload["email"] = payload["email"].strip()
            payload["email_lower"] = normalize_key(payload["email"])
        return await self.update_fields(user_id, payload)

    async def get_by_email(self, email: str) -> tuple[UserResult, str] | None:
        """Return the non-archived user with this email and the stored password hash."""
        q = (
            self._coll.where("email_lower", "==", normalize_key(email))
            .where("is_archived", "==", False)
            .limit(1)
        )
        async for snapshot in q.stream():
            data = snapshot.to_dict()
            return self.to_result(snapshot), data.get("hashed_password", "")
        return None

    async def count_active_owners(self, business_id: str) -> int:
        return await (
            self._coll.where("business_id", "==", business_id)
            .where("role_type", "==", RoleType.OWNER.value)
            .where("is_archived", "==", False)
            .count()
        )

    async def touch_last_login(self, user_id: str) -> None:
        await self._coll.document(user_id).update({"last_login_at": utc_now()})
