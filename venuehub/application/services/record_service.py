"""Generic CRUD + archive lifecycle for tenant-scoped archivable records.

One RecordService instance serves one RecordType (partners, reminders,
supplies, finance records, contracts, invoices). Domain field validation
happens in the request schemas; this service owns tenancy, uniqueness,
cross-record references, and the archive rules.
"""

from __future__ import annotations

import logging
from typing import Any

from venuehub.application.dtos.common import ArchiveCounts, ListQuery, Page
from venuehub.application.dtos.record import RecordResult
from venuehub.application.interfaces.repositories import IRecordRepository
from venuehub.application.interfaces.services import IActivityLogger, INotifier
from venuehub.application.services.archive_policy import RecordType
from venuehub.application.services.archive_service import ArchiveService
from venuehub.domain.exceptions import (
    BusinessRuleException,
    ConflictException,
    ResourceNotFoundException,
)
from venuehub.shared.enums import ActivityAction
from venuehub.shared.utils.text import normalize_key

logger = logging.getLogger(__name__)

_PROTECTED_FIELDS = frozenset(
    {
        "id",
        "business_id",
        "is_archived",
        "archived_at",
        "archived_by",
        "created_by",
        "created_at",
        "updated_at",
    }
)


class RecordService:
    """Tenant-scoped record operations for one record type."""

    def __init__(
        self,
        record_type: RecordType,
        repo: IRecordRepository,
        archive_service: ArchiveService,
        partner_repo: IRecordRepository | None = None,
        activity_logger: IActivityLogger | None = None,
        notifier: INotifier | None = None,
    ) -> None:
        self.record_type = record_type
        self._repo = repo
        self._archive = archive_service
        self._partner_repo = partner_repo
        self._activity = activity_logger
        self._notifier = notifier

    @property
    def entity_type(self) -> str:
        return self.record_type.entity_type

    def _prepare(self, data: dict[str, Any]) -> dict[str, Any]:
        payload = {k: v for k, v in data.items() if k not in _PROTECTED_FIELDS}
        for name in self.record_type.normalized_fields:
            if name in payload:
                value = payload[name]
                payload[f"{name}_lower"] = (
                    normalize_key(value) if isinstance(value, str) else None
                )
        return payload

    async def _ensure_unique(
        self,
        business_id: str,
        payload: dict[str, Any],
        exclude_id: str | None = None,
    ) -> None:
        for unique in self.record_type.policy.unique_fields:
            value = payload.get(unique.field)
            if value is None:
                continue
            scope = business_id if unique.scope == "tenant" else None
            if await self._repo.exists_active(unique.field, value, scope, exclude_id):
                raise ConflictException(self.entity_type, unique.label, value)

    async def _validate_references(self, business_id: str, payload: dict[str, Any]) -> None:
        """Referenced partners must exist in the same business (archived ones included)."""
        for name in self.record_type.partner_reference_fields:
            partner_id = payload.get(name)
            if not partner_id:
                continue
            found = None
            if self._partner_repo is not None:
                found = await self._partner_repo.get_by_id_and_business(
                    partner_id, business_id
                )
            if found is None:
                raise ResourceNotFoundException("partner", partner_id)

    async def _changed(
        self,
        business_id: str,
        action: ActivityAction,
        actor_id: str,
        record_id: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        if self._activity is not None:
            await self._activity.log(
                business_id,
                actor_id,
                action,
                self.entity_type,
                record_id,
                details=f"{self.entity_type} {action.value}",
                metadata=metadata,
            )
        if self._notifier is not None:
            await self._notifier.notify(
                business_id,
                f"{self.entity_type}.{action.value}",
                {"id": record_id, "actor_id": actor_id},
            )

    async def create(
        self, business_id: str, actor_id: str, data: dict[str, Any]
    ) -> RecordResult:
        """Create a record in the business.

        Raises:
            ConflictException: A unique field collides with an active record.
            ResourceNotFoundException: A referenced partner is not in this business.
        """
        payload = self._prepare(data)
        await self._ensure_unique(business_id, payload)
        await self._validate_references(business_id, payload)
        created = await self._repo.insert(
            {
                **payload,
                **self.record_type.initial_fields,
                "business_id": business_id,
                "created_by": actor_id,
            }
        )
        logger.info("%s created: %s in %s", self.entity_type, created.id, business_id)
        await self._changed(business_id, ActivityAction.CREATED, actor_id, created.id)
        return created

    async def list(self, business_id: str, query: ListQuery) -> Page[RecordResult]:
        """Return a page of records (active only unless the query opts in)."""
        return await self._repo.list(business_id, query)

    async def get(self, business_id: str, record_id: str) -> RecordResult:
        """Return a record of the business, archived or not."""
        record = await self._repo.get_by_id_and_business(record_id, business_id)
        if record is None:
            raise ResourceNotFoundException(self.entity_type, record_id)
        return record

    async def update(
        self,
        business_id: str,
        record_id: str,
        actor_id: str,
        changes: dict[str, Any],
    ) -> RecordResult:
        """Update domain fields of an active record.

        Raises:
            ResourceNotFoundException: Missing or in another business.
            BusinessRuleException: The record is archived.
            ConflictException: A changed unique field collides.
        """
        current = await self.get(business_id, record_id)
        if current.is_archived:
            raise BusinessRuleException(
                f"Cannot update an archived {self.entity_type}", rule="archived_readonly"
            )
        payload = self._prepare(changes)
        if not payload:
            return current
        await self._ensure_unique(business_id, payload, exclude_id=record_id)
        await self._validate_references(business_id, payload)
        updated = await self._repo.update_fields(record_id, payload)
        await self._changed(
            business_id,
            ActivityAction.UPDATED,
            actor_id,
            record_id,
            metadata={"fields": sorted(k for k in changes if k in payload)},
        )
        return updated

    async def archive(self, business_id: str, record_id: str, actor_id: str) -> RecordResult:
        return await self._archive.archive(
            self.record_type.policy, self._repo, record_id, business_id, actor_id
        )

    async def restore(self, business_id: str, record_id: str, actor_id: str) -> RecordResult:
        return await self._archive.restore(
            self.record_type.policy, self._repo, record_id, business_id, actor_id
        )

    async def hard_delete(self, business_id: str, record_id: str, actor_id: str) -> None:
        """Delete an archived record that nothing references.

        Raises:
            ResourceNotFoundException: Missing or in another business.
            BusinessRuleException: The record is not archived.
            ArchiveBlockedException: Other records still reference it.
        """
        current = await self.get(business_id, record_id)
        if not current.is_archived:
            raise BusinessRuleException(
                f"{self.entity_type.capitalize()} must be archived before permanent deletion",
                rule="delete_requires_archive",
            )
        await self._archive.check_guards(
            self.record_type.policy, record_id, business_id, for_delete=True
        )
        await self._repo.delete(record_id)
        logger.info("%s deleted: %s by %s", self.entity_type, record_id, actor_id)
        await self._changed(business_id, ActivityAction.DELETED, actor_id, record_id)

    async def stats(self, business_id: str) -> ArchiveCounts:
        return await self._repo.archive_counts(business_id)
