"""Per-entity archive rules: unique fields, forced status, dependency guards.

Each archivable entity type has one ArchivePolicy. The ArchiveService reads
it to know which fields must stay unique among active records, which status
field to force on archive/restore, and which dependent records block the
transition.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from venuehub.application.interfaces.repositories import Filter
from venuehub.core.constants import (
    COLLECTION_CONTRACTS,
    COLLECTION_EVENTS,
    COLLECTION_FINANCE_RECORDS,
    COLLECTION_INVOICES,
    COLLECTION_PARTNERS,
    COLLECTION_REMINDERS,
    COLLECTION_SUPPLIES,
    COLLECTION_USERS,
)
from venuehub.domain.enums import EventStatus, ReminderStatus, SupplyStatus


@dataclass(frozen=True)
class UniqueField:
    """A field that must be unique among non-archived records.

    Attributes:
        field: Stored lookup field (normalized, e.g. email_lower).
        label: Field name reported in ConflictException (e.g. email).
        scope: "tenant" (per business) or "global" (whole platform).
    """

    field: str
    label: str
    scope: Literal["tenant", "global"] = "tenant"


@dataclass(frozen=True)
class DependencyGuard:
    """Records in another collection that point at the record being changed.

    Attributes:
        collection: Collection holding the referencing records.
        reference_field: Field that holds the referenced ID.
        description: Human-readable name for the blocking records.
        operator: "==" for a scalar reference, "array_contains" for a list of IDs.
        statuses: When set, only records with status in this list count.
        exclude_archived: When True, archived referencing records do not count.
    """

    collection: str
    reference_field: str
    description: str
    operator: str = "=="
    statuses: tuple[str, ...] = ()
    exclude_archived: bool = False

    def filters(self, record_id: str) -> list[Filter]:
        result: list[Filter] = [(self.reference_field, self.operator, record_id)]
        if self.statuses:
            result.append(("status", "in", list(self.statuses)))
        if self.exclude_archived:
            result.append(("is_archived", "==", False))
        return result


@dataclass(frozen=True)
class ArchivePolicy:
    """Archive/restore rules of one entity type."""

    entity_type: str
    status_field: str | None = None
    active_value: Any = None
    inactive_value: Any = None
    unique_fields: tuple[UniqueField, ...] = ()
    archive_guards: tuple[DependencyGuard, ...] = ()
    delete_guards: tuple[DependencyGuard, ...] = ()

    def archive_changes(self) -> dict[str, Any]:
        """Status fields forced when archiving."""
        return {self.status_field: self.inactive_value} if self.status_field else {}

    def restore_changes(self) -> dict[str, Any]:
        """Status fields forced when restoring."""
        return {self.status_field: self.active_value} if self.status_field else {}


_PARTNER_ACTIVE_EVENTS = DependencyGuard(
    collection=COLLECTION_EVENTS,
    reference_field="partner_ids",
    operator="array_contains",
    statuses=tuple(EventStatus.non_terminal()),
    description="active events",
)

PARTNER_POLICY = ArchivePolicy(
    entity_type="partner",
    unique_fields=(UniqueField("email_lower", "email"),),
    archive_guards=(_PARTNER_ACTIVE_EVENTS,),
    delete_guards=(
        DependencyGuard(
            collection=COLLECTION_EVENTS,
            reference_field="partner_ids",
            operator="array_contains",
            description="events",
        ),
        DependencyGuard(
            collection=COLLECTION_FINANCE_RECORDS,
            reference_field="related_partner_id",
            description="finance records",
        ),
        DependencyGuard(
            collection=COLLECTION_CONTRACTS,
            reference_field="related_partner_id",
            description="contracts",
        ),
    ),
)

ROLE_POLICY = ArchivePolicy(
    entity_type="role",
    unique_fields=(UniqueField("name_lower", "name"),),
    archive_guards=(
        DependencyGuard(
            collection=COLLECTION_USERS,
            reference_field="role_id",
            exclude_archived=True,
            description="users",
        ),
    ),
)

USER_POLICY = ArchivePolicy(
    entity_type="user",
    status_field="is_active",
    active_value=True,
    inactive_value=False,
    unique_fields=(UniqueField("email_lower", "email", scope="global"),),
)

BUSINESS_POLICY = ArchivePolicy(
    entity_type="business",
    status_field="is_active",
    active_value=True,
    inactive_value=False,
)

REMINDER_POLICY = ArchivePolicy(entity_type="reminder")

SUPPLY_POLICY = ArchivePolicy(
    entity_type="supply",
    status_field="status",
    active_value=SupplyStatus.ACTIVE.value,
    inactive_value=SupplyStatus.INACTIVE.value,
)

FINANCE_POLICY = ArchivePolicy(entity_type="finance")

CONTRACT_POLICY = ArchivePolicy(entity_type="contract")

INVOICE_POLICY = ArchivePolicy(
    entity_type="invoice",
    unique_fields=(UniqueField("number_lower", "number"),),
)


@dataclass(frozen=True)
class RecordType:
    """Everything the generic record service needs to know about one collection.

    Attributes:
        entity_type: Resource name used in errors, logs, and notifications.
        collection: Document store collection.
        policy: Archive rules.
        normalized_fields: Source fields mirrored into "<field>_lower".
        search_field: Normalized field used for prefix search.
        partner_reference_fields: Fields that must name a partner of the same business.
        initial_fields: Fields every new record starts with (not settable by clients).
    """

    entity_type: str
    collection: str
    policy: ArchivePolicy
    normalized_fields: tuple[str, ...] = ()
    search_field: str | None = None
    partner_reference_fields: tuple[str, ...] = ()
    initial_fields: dict[str, Any] = field(default_factory=dict)


PARTNER_RECORD = RecordType(
    entity_type="partner",
    collection=COLLECTION_PARTNERS,
    policy=PARTNER_POLICY,
    normalized_fields=("name", "email"),
    search_field="name_lower",
)

REMINDER_RECORD = RecordType(
    entity_type="reminder",
    collection=COLLECTION_REMINDERS,
    policy=REMINDER_POLICY,
    normalized_fields=("title",),
    search_field="title_lower",
    initial_fields={"status": ReminderStatus.ACTIVE.value},
)

SUPPLY_RECORD = RecordType(
    entity_type="supply",
    collection=COLLECTION_SUPPLIES,
    policy=SUPPLY_POLICY,
    normalized_fields=("name",),
    search_field="name_lower",
)

FINANCE_RECORD = RecordType(
    entity_type="finance",
    collection=COLLECTION_FINANCE_RECORDS,
    policy=FINANCE_POLICY,
    normalized_fields=("category",),
    search_field="category_lower",
    partner_reference_fields=("related_partner_id",),
)

CONTRACT_RECORD = RecordType(
    entity_type="contract",
    collection=COLLECTION_CONTRACTS,
    policy=CONTRACT_POLICY,
    normalized_fields=("title",),
    search_field="title_lower",
    partner_reference_fields=("related_partner_id",),
)

INVOICE_RECORD = RecordType(
    entity_type="invoice",
    collection=COLLECTION_INVOICES,
    policy=INVOICE_POLICY,
    normalized_fields=("number", "client_name"),
    search_field="client_name_lower",
)
