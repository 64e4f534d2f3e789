"""
gateway/services/scheduler.py

Reminder Scheduler.
- select_next_trigger: pure selection policy (snooze-due first, then time match)
- apply_trigger: pure state transition for a fired reminder
- ReminderScheduler: owns the reminder list, polls the clock on a fixed
  interval, fires at most one reminder per tick and persists every mutation

Uses constants from gateway/constants.py; no magic numbers allowed.
"""

import asyncio
import contextlib
import uuid
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Optional, Sequence

import structlog

from config import settings
from gateway.constants import SNOOZE_CHOICES_MIN
from gateway.schemas import Reminder, ReminderCreate, SchedulerStatus
from gateway.services.alarm import AlarmSignal, AlarmUnavailableError
from gateway.services.notification import send_push
from gateway.services.persistence import ReminderStore

logger = structlog.get_logger(__name__)


class ReminderNotFoundError(KeyError):
    """Raised when a reminder id does not exist."""


class NoActiveAlarmError(LookupError):
    """Raised when an alarm operation needs an active reminder and there is none."""


def composite_key(now: datetime) -> str:
    """Per-minute trigger key, e.g. '2024-06-15-08:30' (local calendar date)."""
    return f"{now.date().isoformat()}-{now:%H:%M}"


def weekday_index(now: datetime) -> int:
    """Weekday with 0=Sunday .. 6=Saturday."""
    return now.isoweekday() % 7


def _snooze_due(reminder: Reminder, now: datetime) -> bool:
    return reminder.next_snooze_at is not None and now >= reminder.next_snooze_at


def _time_due(reminder: Reminder, now: datetime, key: str) -> bool:
    if reminder.time != f"{now:%H:%M}":
        return False
    # Already fired during this minute
    if reminder.last_triggered_key == key:
        return False
    if reminder.repeat == "weekly":
        return weekday_index(now) in (reminder.days_of_week or [])
    return True


def select_next_trigger(reminders: Sequence[Reminder], now: datetime) -> Optional[str]:
    """
    Pick the single reminder to fire at `now`, or None.

    Priority:
    1. First enabled reminder whose snooze time has been reached
    2. First enabled reminder matching HH:MM, not yet fired this minute,
       and (weekly only) scheduled for today
    Ties within a pass are broken by list order.
    """
    enabled = [reminder for reminder in reminders if reminder.enabled]

    for reminder in enabled:
        if _snooze_due(reminder, now):
            return reminder.id

    key = composite_key(now)
    for reminder in enabled:
        if _time_due(reminder, now, key):
            return reminder.id

    return None


def apply_trigger(reminder: Reminder, now: datetime) -> Reminder:
    """Return the reminder as it should look after firing at `now`."""
    return reminder.model_copy(
        update={
            "last_triggered_key": composite_key(now),
            "next_snooze_at": None,
            "enabled": reminder.enabled and reminder.repeat != "none",
        }
    )


class ReminderScheduler:
    """
    Owns the in-memory reminder list and the polling loop.

    The reminder list is the only shared mutable state; every mutation is
    followed by a store checkpoint. Selection and state transition within a
    tick run without suspension, so ticks never interleave with each other.
    """

    def __init__(
        self,
        store: ReminderStore,
        alarm: AlarmSignal,
        clock: Callable[[], datetime] = datetime.now,
        poll_interval: Optional[float] = None,
        notifier: Callable[[str, str], Awaitable[None]] = send_push,
    ) -> None:
        self._store = store
        self._alarm = alarm
        self._clock = clock
        self._poll_interval = (
            settings.reminder_poll_interval_sec if poll_interval is None else poll_interval
        )
        self._notifier = notifier
        self._task: Optional[asyncio.Task] = None
        self._alarm_error: Optional[str] = None
        self.reminders: list[Reminder] = []
        self.active_reminder_id: Optional[str] = None

    # ── Lifecycle ────────────────────────────────────────────

    async def load(self) -> None:
        self.reminders = await self._store.load()

    async def start(self) -> None:
        """Rehydrate reminders and begin polling. No-op when already running."""
        if self._task is not None:
            return
        await self.load()
        self._task = asyncio.create_task(self._run())
        logger.info(
            "scheduler_started",
            reminders=len(self.reminders),
            poll_interval_sec=self._poll_interval,
        )

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("scheduler_stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._poll_interval)
            try:
                await self.tick()
            except Exception as exc:
                logger.error("scheduler_tick_failed", error=str(exc))

    # ── Polling ──────────────────────────────────────────────

    async def tick(self) -> Optional[Reminder]:
        """Evaluate reminders once; fire at most one. Returns the fired reminder."""
        if not self.reminders:
            return None
        now = self._clock()
        reminder_id = select_next_trigger(self.reminders, now)
        if reminder_id is None:
            return None

        triggered = self._replace(reminder_id, lambda reminder: apply_trigger(reminder, now))
        self.active_reminder_id = triggered.id
        logger.info(
            "reminder_triggered",
            reminder_id=triggered.id,
            title=triggered.title,
            key=triggered.last_triggered_key,
            still_enabled=triggered.enabled,
        )
        await self._store.save(self.reminders)
        await self._sound_alarm(triggered)
        return triggered

    async def _sound_alarm(self, reminder: Reminder) -> None:
        try:
            await self._alarm.start()
            self._alarm_error = None
        except AlarmUnavailableError as exc:
            self._alarm_error = str(exc)
            logger.warning("alarm_unavailable", reminder_id=reminder.id, error=str(exc))
            await self._notifier(reminder.id, f"Time for {reminder.title} ({reminder.time})")
        except Exception as exc:
            self._alarm_error = str(exc)
            logger.error("alarm_start_failed", reminder_id=reminder.id, error=str(exc))

    # ── User actions ─────────────────────────────────────────

    def list_reminders(self) -> list[Reminder]:
        return list(self.reminders)

    def status(self) -> SchedulerStatus:
        return SchedulerStatus(
            active_reminder_id=self.active_reminder_id,
            alarm_playing=self._alarm.is_playing,
            alarm_error=self._alarm_error,
        )

    async def add(self, payload: ReminderCreate) -> Reminder:
        reminder = Reminder(id=uuid.uuid4().hex, **payload.model_dump())
        self.reminders.append(reminder)
        logger.info("reminder_created", reminder_id=reminder.id, time=reminder.time, repeat=reminder.repeat)
        await self._store.save(self.reminders)
        return reminder

    async def toggle(self, reminder_id: str) -> Reminder:
        updated = self._replace(
            reminder_id, lambda reminder: reminder.model_copy(update={"enabled": not reminder.enabled})
        )
        logger.info("reminder_toggled", reminder_id=reminder_id, enabled=updated.enabled)
        await self._store.save(self.reminders)
        return updated

    async def delete(self, reminder_id: str) -> None:
        remaining = [reminder for reminder in self.reminders if reminder.id != reminder_id]
        if len(remaining) == len(self.reminders):
            raise ReminderNotFoundError(reminder_id)
        self.reminders = remaining
        if self.active_reminder_id == reminder_id:
            self.stop_alarm()
        logger.info("reminder_deleted", reminder_id=reminder_id)
        await self._store.save(self.reminders)

    async def snooze(self, minutes: int) -> Reminder:
        """Re-arm the active reminder `minutes` from now and silence the alarm."""
        if minutes not in SNOOZE_CHOICES_MIN:
            raise ValueError(f"minutes must be one of {SNOOZE_CHOICES_MIN}")
        if self.active_reminder_id is None:
            raise NoActiveAlarmError("no reminder is currently alarming")

        snooze_until = self._clock() + timedelta(minutes=minutes)
        updated = self._replace(
            self.active_reminder_id,
            lambda reminder: reminder.model_copy(
                update={
                    "next_snooze_at": snooze_until,
                    # a one-shot reminder was disabled by its own trigger
                    "enabled": reminder.enabled or reminder.repeat == "none",
                }
            ),
        )
        self.stop_alarm()
        logger.info("reminder_snoozed", reminder_id=updated.id, until=snooze_until.isoformat())
        await self._store.save(self.reminders)
        return updated

    def stop_alarm(self) -> None:
        self._alarm.stop()
        self.active_reminder_id = None

    async def preview_alarm(self) -> None:
        """Sound the alarm without a reminder. Raises AlarmUnavailableError."""
        await self._alarm.start()

    def _replace(
        self,
        reminder_id: str,
        update: Callable[[Reminder], Reminder],
    ) -> Reminder:
        for index, reminder in enumerate(self.reminders):
            if reminder.id == reminder_id:
                updated = update(reminder)
                self.reminders[index] = updated
                return updated
        raise ReminderNotFoundError(reminder_id)
