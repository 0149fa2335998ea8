"""Document store and repository dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from venuehub.application.services.archive_policy import (
    CONTRACT_RECORD,
    FINANCE_RECORD,
    INVOICE_RECORD,
    PARTNER_RECORD,
    REMINDER_RECORD,
    SUPPLY_RECORD,
    RecordType,
)
from venuehub.infrastructure.database import DocumentStore, get_document_store
from venuehub.infrastructure.repositories import (
    ActivityLogRepository,
    BusinessRepository,
    PermissionRepository,
    RecordRepository,
    ReferenceRepository,
    RoleRepository,
    UserRepository,
)

RECORD_TYPES: dict[str, RecordType] = {
    t.entity_type: t
    for t in (
        PARTNER_RECORD,
        REMINDER_RECORD,
        SUPPLY_RECORD,
        FINANCE_RECORD,
        CONTRACT_RECORD,
        INVOICE_RECORD,
    )
}


def get_store() -> DocumentStore:
    """Process-wide document store (created on first use)."""
    return get_document_store()


StoreDep = Annotated[DocumentStore, Depends(get_store)]


def get_user_repo(store: StoreDep) -> UserRepository:
    return UserRepository(store)


def get_role_repo(store: StoreDep) -> RoleRepository:
    return RoleRepository(store)


def get_permission_repo(store: StoreDep) -> PermissionRepository:
    return PermissionRepository(store)


def get_business_repo(store: StoreDep) -> BusinessRepository:
    return BusinessRepository(store)


def get_reference_repo(store: StoreDep) -> ReferenceRepository:
    return ReferenceRepository(store)


def get_activity_log_repo(store: StoreDep) -> ActivityLogRepository:
    return ActivityLogRepository(store)


def build_record_repo(store: DocumentStore, record_type: RecordType) -> RecordRepository:
    """Repository bound to the collection of one record type."""
    return RecordRepository(
        store,
        record_type.collection,
        record_type.entity_type,
        search_field=record_type.search_field,
    )
