"""Business (tenant) repository.

A business document stores its own ID in business_id so the same
tenant-scoped reads used everywhere else apply to it.
"""

from __future__ import annotations

from typing import Any

from venuehub.application.dtos.business import BusinessResult
from venuehub.core.constants import COLLECTION_BUSINESSES
from venuehub.infrastructure.repositories.base import DocumentRepository
from venuehub.shared.utils.generators import generate_cuid
from venuehub.shared.utils.text import normalize_key


class BusinessRepository(DocumentRepository[BusinessResult]):
    """Businesses (tenants)."""

    collection_name = COLLECTION_BUSINESSES
    resource_type = "business"
    search_field = "name_lower"

    def _to_result(self, doc_id: str, data: dict[str, Any]) -> BusinessResult:
        return BusinessResult(
            id=doc_id,
            name=data.get("name", ""),
            category=data.get("category", "other"),
            owner_id=data.get("owner_id"),
            email=data.get("email"),
            phone=data.get("phone"),
            description=data.get("description") or "",
            is_active=data.get("is_active", True),
            is_archived=data.get("is_archived", False),
            archived_at=data.get("archived_at"),
            archived_by=data.get("archived_by"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    async def create_business(
        self,
        name: str,
        category: str,
        *,
        email: str | None = None,
        phone: str | None = None,
        description: str = "",
    ) -> BusinessResult:
        business_id = generate_cuid()
        return await self.insert(
            {
                "business_id": business_id,
                "name": name.strip(),
                "name_lower": normalize_key(name),
                "category": category,
                "owner_id": None,
                "email": email,
                "phone": phone,
                "description": description,
                "is_active": True,
            },
            doc_id=business_id,
        )

    async def update_business(
        self, business_id: str, changes: dict[str, Any]
    ) -> BusinessResult:
        payload = dict(changes)
        if "name" in payload:
            payload["name"] = payload["name"].strip()
            payload["name_lower"] = normalize_key(payload["name"])
        return await self.update_fields(business_id, payload)
