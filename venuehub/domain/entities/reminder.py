"""Reminder domain entity: lifecycle status transitions.

Status (active/completed/snoozed/cancelled) is independent of the archive
flags; an archived reminder accepts no status transitions.
"""

from dataclasses import dataclass
from datetime import datetime

from venuehub.domain.enums import ReminderStatus
from venuehub.domain.exceptions import BusinessRuleException

_OPEN = (ReminderStatus.ACTIVE, ReminderStatus.SNOOZED)


@dataclass
class ReminderEntity:
    """Domain entity for a reminder's status fields."""

    id: str
    status: ReminderStatus
    is_archived: bool = False
    snooze_until: datetime | None = None
    completed_at: datetime | None = None
    completed_by: str | None = None

    def _ensure_not_archived(self) -> None:
        if self.is_archived:
            raise BusinessRuleException(
                "Archived reminders cannot change status", rule="reminder_archived"
            )

    def _ensure_open(self, action: str) -> None:
        self._ensure_not_archived()
        if self.status not in _OPEN:
            raise BusinessRuleException(
                f"Cannot {action} a {self.status.value} reminder",
                rule="reminder_transition",
            )

    def complete(self, actor_id: str, at: datetime) -> None:
        """active|snoozed -> completed."""
        self._ensure_open("complete")
        self.status = ReminderStatus.COMPLETED
        self.completed_at = at
        self.completed_by = actor_id
        self.snooze_until = None

    def cancel(self) -> None:
        """active|snoozed -> cancelled."""
        self._ensure_open("cancel")
        self.status = ReminderStatus.CANCELLED
        self.snooze_until = None

    def snooze(self, until: datetime, now: datetime) -> None:
        """active|snoozed -> snoozed until a future instant."""
        self._ensure_open("snooze")
        if until <= now:
            raise BusinessRuleException(
                "Snooze time must be in the future", rule="snooze_in_past"
            )
        self.status = ReminderStatus.SNOOZED
        self.snooze_until = until

    def reactivate(self) -> None:
        """completed|cancelled|snoozed -> active."""
        self._ensure_not_archived()
        if self.status == ReminderStatus.ACTIVE:
            raise BusinessRuleException(
                "Reminder is already active", rule="reminder_transition"
            )
        self.status = ReminderStatus.ACTIVE
        self.snooze_until = None
        self.completed_at = None
        self.completed_by = None
