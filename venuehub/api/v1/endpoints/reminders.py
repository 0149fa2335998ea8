"""Reminder status transitions and the upcoming view.

Mounted on /reminders ahead of the generic record routes so /upcoming is
not taken for a record id.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from venuehub.api.v1.dependencies import BusinessId, authorize, get_reminder_service
from venuehub.application.dtos.user import UserResult
from venuehub.application.services import ReminderService
from venuehub.core.limiter import limit_writes
from venuehub.schemas.records import RecordResponse, ReminderSnooze

router = APIRouter()

ReminderServiceDep = Annotated[ReminderService, Depends(get_reminder_service)]
CanUpdate = Annotated[UserResult, Depends(authorize("reminders.update.all"))]


@router.get("/upcoming", response_model=list[RecordResponse])
async def upcoming_reminders(
    business_id: BusinessId,
    service: ReminderServiceDep,
    days: Annotated[int, Query(ge=1, le=90)] = 7,
    _: Annotated[object, Depends(authorize("reminders.read.all"))] = None,
):
    """Active reminders due in the next `days` days, soonest first."""
    reminders = await service.upcoming(business_id, days)
    return [RecordResponse.from_result(r) for r in reminders]


@router.post("/{reminder_id}/complete", response_model=RecordResponse)
@limit_writes
async def complete_reminder(
    request: Request,
    reminder_id: str,
    business_id: BusinessId,
    service: ReminderServiceDep,
    current_user: CanUpdate,
):
    record = await service.complete(business_id, reminder_id, current_user.id)
    return RecordResponse.from_result(record)


@router.post("/{reminder_id}/cancel", response_model=RecordResponse)
@limit_writes
async def cancel_reminder(
    request: Request,
    reminder_id: str,
    business_id: BusinessId,
    service: ReminderServiceDep,
    current_user: CanUpdate,
):
    record = await service.cancel(business_id, reminder_id, current_user.id)
    return RecordResponse.from_result(record)


@router.post("/{reminder_id}/snooze", response_model=RecordResponse)
@limit_writes
async def snooze_reminder(
    request: Request,
    reminder_id: str,
    body: ReminderSnooze,
    business_id: BusinessId,
    service: ReminderServiceDep,
    current_user: CanUpdate,
):
    """Snooze until a future time."""
    record = await service.snooze(
        business_id, reminder_id, current_user.id, body.snooze_until
    )
    return RecordResponse.from_result(record)


@router.post("/{reminder_id}/reactivate", response_model=RecordResponse)
@limit_writes
async def reactivate_reminder(
    request: Request,
    reminder_id: str,
    business_id: BusinessId,
    service: ReminderServiceDep,
    current_user: CanUpdate,
):
    record = await service.reactivate(business_id, reminder_id, current_user.id)
    return RecordResponse.from_result(record)
