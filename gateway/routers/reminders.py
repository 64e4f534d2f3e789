"""
gateway/routers/reminders.py

Medication reminder endpoints.
All state lives in the ReminderScheduler attached to app.state at startup.
"""

import structlog
from fastapi import APIRouter, HTTPException, Request

from gateway.schemas import Reminder, ReminderCreate, SchedulerStatus, SnoozeRequest
from gateway.services.alarm import AlarmUnavailableError
from gateway.services.scheduler import (
    NoActiveAlarmError,
    ReminderNotFoundError,
    ReminderScheduler,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/reminders", tags=["reminders"])


def _scheduler(request: Request) -> ReminderScheduler:
    return request.app.state.scheduler


@router.get("", response_model=list[Reminder])
async def list_reminders(request: Request) -> list[Reminder]:
    return _scheduler(request).list_reminders()


@router.post("", response_model=Reminder, status_code=201)
async def create_reminder(payload: ReminderCreate, request: Request) -> Reminder:
    return await _scheduler(request).add(payload)


@router.get("/status", response_model=SchedulerStatus)
async def scheduler_status(request: Request) -> SchedulerStatus:
    return _scheduler(request).status()


@router.post("/{reminder_id}/toggle", response_model=Reminder)
async def toggle_reminder(reminder_id: str, request: Request) -> Reminder:
    try:
        return await _scheduler(request).toggle(reminder_id)
    except ReminderNotFoundError:
        raise HTTPException(status_code=404, detail="Reminder not found")


@router.delete("/{reminder_id}", status_code=204)
async def delete_reminder(reminder_id: str, request: Request) -> None:
    try:
        await _scheduler(request).delete(reminder_id)
    except ReminderNotFoundError:
        raise HTTPException(status_code=404, detail="Reminder not found")


@router.post("/snooze", response_model=Reminder)
async def snooze_alarm(payload: SnoozeRequest, request: Request) -> Reminder:
    try:
        return await _scheduler(request).snooze(payload.minutes)
    except NoActiveAlarmError as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.post("/stop", response_model=SchedulerStatus)
async def stop_alarm(request: Request) -> SchedulerStatus:
    scheduler = _scheduler(request)
    scheduler.stop_alarm()
    return scheduler.status()


@router.post("/alarm/preview", response_model=SchedulerStatus)
async def preview_alarm(request: Request) -> SchedulerStatus:
    """Sound the alarm on demand so the user can check their audio."""
    scheduler = _scheduler(request)
    try:
        await scheduler.preview_alarm()
    except AlarmUnavailableError as exc:
        logger.warning("alarm_preview_unavailable", error=str(exc))
        raise HTTPException(status_code=503, detail=str(exc))
    return scheduler.status()
