"""Reminder status transitions and the upcoming view."""

from __future__ import annotations

from datetime import datetime, timedelta

from venuehub.application.dtos.record import RecordResult
from venuehub.application.interfaces.repositories import IRecordRepository
from venuehub.application.interfaces.services import IActivityLogger, INotifier
from venuehub.domain.entities.reminder import ReminderEntity
from venuehub.domain.enums import ReminderStatus
from venuehub.domain.exceptions import ResourceNotFoundException
from venuehub.shared.enums import ActivityAction
from venuehub.shared.utils.datetime import ensure_utc, utc_now

_RESOURCE = "reminder"


class ReminderService:
    """complete / cancel / snooze / reactivate, plus reminders due soon."""

    def __init__(
        self,
        repo: IRecordRepository,
        activity_logger: IActivityLogger | None = None,
        notifier: INotifier | None = None,
    ) -> None:
        self._repo = repo
        self._activity = activity_logger
        self._notifier = notifier

    async def _load(self, business_id: str, reminder_id: str) -> ReminderEntity:
        record = await self._repo.get_by_id_and_business(reminder_id, business_id)
        if record is None:
            raise ResourceNotFoundException(_RESOURCE, reminder_id)
        return ReminderEntity(
            id=record.id,
            status=ReminderStatus(record.data.get("status", ReminderStatus.ACTIVE.value)),
            is_archived=record.is_archived,
            snooze_until=record.data.get("snooze_until"),
            completed_at=record.data.get("completed_at"),
            completed_by=record.data.get("completed_by"),
        )

    async def _save(
        self, business_id: str, reminder: ReminderEntity, actor_id: str
    ) -> RecordResult:
        updated = await self._repo.update_fields(
            reminder.id,
            {
                "status": reminder.status.value,
                "snooze_until": reminder.snooze_until,
                "completed_at": reminder.completed_at,
                "completed_by": reminder.completed_by,
            },
        )
        if self._activity is not None:
            await self._activity.log(
                business_id,
                actor_id,
                ActivityAction.STATUS_CHANGED,
                _RESOURCE,
                reminder.id,
                details=f"reminder {reminder.status.value}",
            )
        if self._notifier is not None:
            await self._notifier.notify(
                business_id,
                f"reminder.{reminder.status.value}",
                {"id": reminder.id, "actor_id": actor_id},
            )
        return updated

    async def complete(self, business_id: str, reminder_id: str, actor_id: str) -> RecordResult:
        reminder = await self._load(business_id, reminder_id)
        reminder.complete(actor_id, utc_now())
        return await self._save(business_id, reminder, actor_id)

    async def cancel(self, business_id: str, reminder_id: str, actor_id: str) -> RecordResult:
        reminder = await self._load(business_id, reminder_id)
        reminder.cancel()
        return await self._save(business_id, reminder, actor_id)

    async def snooze(
        self,
        business_id: str,
        reminder_id: str,
        actor_id: str,
        until: datetime,
    ) -> RecordResult:
        """Snooze until a future instant (naive datetimes are taken as UTC)."""
        reminder = await self._load(business_id, reminder_id)
        reminder.snooze(ensure_utc(until) or until, utc_now())
        return await self._save(business_id, reminder, actor_id)

    async def reactivate(
        self, business_id: str, reminder_id: str, actor_id: str
    ) -> RecordResult:
        reminder = await self._load(business_id, reminder_id)
        reminder.reactivate()
        return await self._save(business_id, reminder, actor_id)

    async def upcoming(self, business_id: str, days: int = 7) -> list[RecordResult]:
        """Active reminders due between now and now + days, soonest first."""
        now = utc_now()
        return await self._repo.list_between(
            business_id,
            "reminder_date",
            now,
            now + timedelta(days=days),
            statuses=[ReminderStatus.ACTIVE.value],
        )
