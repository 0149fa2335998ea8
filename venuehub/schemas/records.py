"""Request/response schemas for archivable tenant records.

Create models carry defaults for optional fields; update models leave every
field optional and are dumped with exclude_unset so only sent fields change.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from venuehub.application.dtos.record import RecordResult
from venuehub.domain.enums import (
    ContractStatus,
    FinanceStatus,
    FinanceType,
    InvoiceStatus,
    PartnerCategory,
    PartnerStatus,
    ReminderPriority,
    SupplyStatus,
)
from venuehub.schemas.common import UtcDatetime


class _RecordBody(BaseModel):
    model_config = ConfigDict(use_enum_values=True, extra="forbid")


# Partners


class PartnerCreate(_RecordBody):
    name: str = Field(..., min_length=1, max_length=200)
    company: str | None = Field(default=None, max_length=200)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=32)
    category: PartnerCategory = PartnerCategory.OTHER
    status: PartnerStatus = PartnerStatus.ACTIVE
    rating: int | None = Field(default=None, ge=1, le=5)
    notes: str | None = Field(default=None, max_length=2000)


class PartnerUpdate(_RecordBody):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    company: str | None = Field(default=None, max_length=200)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=32)
    category: PartnerCategory | None = None
    status: PartnerStatus | None = None
    rating: int | None = Field(default=None, ge=1, le=5)
    notes: str | None = Field(default=None, max_length=2000)


# Reminders


class ReminderCreate(_RecordBody):
    """New reminders start active; status moves only through the transition routes."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    type: str = Field(default="other", max_length=50)
    priority: ReminderPriority = ReminderPriority.MEDIUM
    reminder_date: UtcDatetime
    reminder_time: str | None = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    assigned_to: str | None = None


class ReminderUpdate(_RecordBody):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    type: str | None = Field(default=None, max_length=50)
    priority: ReminderPriority | None = None
    reminder_date: UtcDatetime | None = None
    reminder_time: str | None = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    assigned_to: str | None = None


class ReminderSnooze(BaseModel):
    """Request body for POST /reminders/{id}/snooze."""

    snooze_until: UtcDatetime


# Supplies


class SupplyCreate(_RecordBody):
    name: str = Field(..., min_length=1, max_length=200)
    category: str | None = Field(default=None, max_length=100)
    unit: str = Field(default="unit", max_length=30)
    current_stock: float = Field(default=0, ge=0)
    minimum_stock: float = Field(default=0, ge=0)
    cost_per_unit: float = Field(default=0, ge=0)
    status: SupplyStatus = SupplyStatus.ACTIVE


class SupplyUpdate(_RecordBody):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    category: str | None = Field(default=None, max_length=100)
    unit: str | None = Field(default=None, max_length=30)
    current_stock: float | None = Field(default=None, ge=0)
    minimum_stock: float | None = Field(default=None, ge=0)
    cost_per_unit: float | None = Field(default=None, ge=0)
    status: SupplyStatus | None = None


# Finance


class FinanceCreate(_RecordBody):
    type: FinanceType
    category: str = Field(..., min_length=1, max_length=100)
    amount: float = Field(..., ge=0)
    date: UtcDatetime
    description: str | None = Field(default=None, max_length=2000)
    status: FinanceStatus = FinanceStatus.PENDING
    related_partner_id: str | None = None


class FinanceUpdate(_RecordBody):
    type: FinanceType | None = None
    category: str | None = Field(default=None, min_length=1, max_length=100)
    amount: float | None = Field(default=None, ge=0)
    date: UtcDatetime | None = None
    description: str | None = Field(default=None, max_length=2000)
    status: FinanceStatus | None = None
    related_partner_id: str | None = None


# Contracts


class ContractCreate(_RecordBody):
    title: str = Field(..., min_length=1, max_length=200)
    client_name: str = Field(..., min_length=1, max_length=200)
    amount: float = Field(default=0, ge=0)
    status: ContractStatus = ContractStatus.DRAFT
    related_partner_id: str | None = None


class ContractUpdate(_RecordBody):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    client_name: str | None = Field(default=None, min_length=1, max_length=200)
    amount: float | None = Field(default=None, ge=0)
    status: ContractStatus | None = None
    related_partner_id: str | None = None


# Invoices


class InvoiceCreate(_RecordBody):
    number: str = Field(..., min_length=1, max_length=50)
    client_name: str = Field(..., min_length=1, max_length=200)
    amount: float = Field(default=0, ge=0)
    due_date: UtcDatetime | None = None
    status: InvoiceStatus = InvoiceStatus.DRAFT


class InvoiceUpdate(_RecordBody):
    number: str | None = Field(default=None, min_length=1, max_length=50)
    client_name: str | None = Field(default=None, min_length=1, max_length=200)
    amount: float | None = Field(default=None, ge=0)
    due_date: UtcDatetime | None = None
    status: InvoiceStatus | None = None


class RecordResponse(BaseModel):
    """Archivable record: metadata plus the record's own fields, flattened."""

    model_config = ConfigDict(extra="allow")

    id: str
    business_id: str
    is_archived: bool
    archived_at: datetime | None = None
    archived_by: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_result(cls, record: RecordResult) -> "RecordResponse":
        return cls(
            **record.data,
            id=record.id,
            business_id=record.business_id,
            is_archived=record.is_archived,
            archived_at=record.archived_at,
            archived_by=record.archived_by,
            created_by=record.created_by,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
