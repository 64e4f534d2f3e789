"""
tests/test_scheduler.py

Unit tests for gateway/services/scheduler.py.
Covers trigger selection, firing bookkeeping, snooze/stop and
degradation when the alarm cannot sound.
Clock, store and alarm are replaced by fakes from tests/fixtures.py.
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from gateway.schemas import ReminderCreate
from gateway.services.alarm import AlarmUnavailableError
from gateway.services.scheduler import (
    NoActiveAlarmError,
    ReminderNotFoundError,
    ReminderScheduler,
    apply_trigger,
    composite_key,
    select_next_trigger,
    weekday_index,
)
from tests.fixtures import (
    TEST_KEY,
    TEST_NOW,
    TEST_WEEKDAY,
    FakeClock,
    MemoryStore,
    RecordingAlarm,
    build_reminder,
)


def _scheduler(reminders=None, alarm=None, clock=None, notifier=None):
    store = MemoryStore(reminders)
    scheduler = ReminderScheduler(
        store,
        alarm or RecordingAlarm(),
        clock=clock or FakeClock(),
        poll_interval=0.01,
        notifier=notifier or AsyncMock(),
    )
    return scheduler, store


# ── Pure selection ──────────────────────────────────────────


def test_composite_key_uses_local_date_and_minute() -> None:
    assert composite_key(TEST_NOW) == TEST_KEY


def test_weekday_index_starts_on_sunday() -> None:
    assert weekday_index(TEST_NOW) == TEST_WEEKDAY
    assert weekday_index(TEST_NOW + timedelta(days=1)) == 0


def test_select_matches_time_once_per_minute() -> None:
    """A reminder already fired under this minute's key is skipped."""
    due = build_reminder(reminder_id="a")
    fired = build_reminder(reminder_id="b", last_triggered_key=TEST_KEY)

    assert select_next_trigger([due], TEST_NOW) == "a"
    assert select_next_trigger([fired], TEST_NOW) is None


def test_select_skips_disabled_and_wrong_minute() -> None:
    reminders = [
        build_reminder(reminder_id="off", enabled=False),
        build_reminder(reminder_id="later", time="08:31"),
    ]
    assert select_next_trigger(reminders, TEST_NOW) is None


def test_select_weekly_only_on_listed_days() -> None:
    not_today = build_reminder(reminder_id="w1", repeat="weekly", days_of_week=[1, 3])
    today = build_reminder(reminder_id="w2", repeat="weekly", days_of_week=[TEST_WEEKDAY])
    empty = build_reminder(reminder_id="w3", repeat="weekly", days_of_week=[])

    assert select_next_trigger([not_today, empty], TEST_NOW) is None
    assert select_next_trigger([not_today, today], TEST_NOW) == "w2"


def test_select_prefers_due_snooze_over_time_match() -> None:
    """A due snooze later in the list wins over an earlier time match."""
    time_match = build_reminder(reminder_id="time")
    snoozed = build_reminder(
        reminder_id="snoozed",
        time="07:00",
        next_snooze_at=TEST_NOW - timedelta(minutes=1),
    )
    assert select_next_trigger([time_match, snoozed], TEST_NOW) == "snoozed"


def test_select_ignores_future_snooze() -> None:
    snoozed = build_reminder(
        reminder_id="snoozed",
        time="07:00",
        next_snooze_at=TEST_NOW + timedelta(minutes=5),
    )
    assert select_next_trigger([snoozed], TEST_NOW) is None


def test_select_breaks_ties_by_list_order() -> None:
    reminders = [build_reminder(reminder_id="first"), build_reminder(reminder_id="second")]
    assert select_next_trigger(reminders, TEST_NOW) == "first"


def test_apply_trigger_disables_one_shot_and_clears_snooze() -> None:
    reminder = build_reminder(
        repeat="none", next_snooze_at=TEST_NOW - timedelta(minutes=1)
    )
    fired = apply_trigger(reminder, TEST_NOW)

    assert fired.enabled is False
    assert fired.last_triggered_key == TEST_KEY
    assert fired.next_snooze_at is None
    # Original is untouched
    assert reminder.enabled is True


def test_apply_trigger_keeps_daily_enabled() -> None:
    assert apply_trigger(build_reminder(repeat="daily"), TEST_NOW).enabled is True


# ── Scheduler ticks ─────────────────────────────────────────


@pytest.mark.asyncio
async def test_tick_fires_persists_and_sounds() -> None:
    alarm = RecordingAlarm()
    scheduler, store = _scheduler([build_reminder()], alarm=alarm)
    await scheduler.load()

    fired = await scheduler.tick()

    assert fired is not None
    assert scheduler.active_reminder_id == fired.id
    assert alarm.starts == 1
    assert store.saves[-1][0].last_triggered_key == TEST_KEY


@pytest.mark.asyncio
async def test_tick_fires_only_once_per_minute() -> None:
    scheduler, store = _scheduler([build_reminder()])
    await scheduler.load()

    assert await scheduler.tick() is not None
    assert await scheduler.tick() is None
    assert len(store.saves) == 1


@pytest.mark.asyncio
async def test_tick_fires_at_most_one_reminder() -> None:
    scheduler, _ = _scheduler(
        [build_reminder(reminder_id="a"), build_reminder(reminder_id="b")]
    )
    await scheduler.load()

    first = await scheduler.tick()
    second = await scheduler.tick()

    assert (first.id, second.id) == ("a", "b")


@pytest.mark.asyncio
async def test_one_shot_reminder_fires_once_across_days() -> None:
    clock = FakeClock()
    scheduler, _ = _scheduler([build_reminder(repeat="none")], clock=clock)
    await scheduler.load()

    assert await scheduler.tick() is not None
    clock.set(TEST_NOW + timedelta(days=1))
    assert await scheduler.tick() is None
    assert scheduler.reminders[0].enabled is False


@pytest.mark.asyncio
async def test_tick_keeps_bookkeeping_when_alarm_unavailable() -> None:
    """Trigger record is saved and a push is sent when audio is missing."""
    notifier = AsyncMock()
    alarm = RecordingAlarm(start_error=AlarmUnavailableError("no audio"))
    scheduler, store = _scheduler([build_reminder()], alarm=alarm, notifier=notifier)
    await scheduler.load()

    fired = await scheduler.tick()

    assert fired.last_triggered_key == TEST_KEY
    assert store.saves[-1][0].last_triggered_key == TEST_KEY
    assert scheduler.status().alarm_error == "no audio"
    notifier.assert_awaited_once()
    assert notifier.await_args.args[0] == fired.id


@pytest.mark.asyncio
async def test_tick_with_no_reminders_is_noop() -> None:
    scheduler, store = _scheduler([])
    await scheduler.load()

    assert await scheduler.tick() is None
    assert store.saves == []


# ── Snooze and stop ─────────────────────────────────────────


@pytest.mark.asyncio
async def test_snooze_rearms_one_shot_reminder() -> None:
    """Snoozing a fired one-shot reminder re-enables it and it fires again."""
    clock = FakeClock()
    alarm = RecordingAlarm()
    scheduler, _ = _scheduler([build_reminder(repeat="none")], alarm=alarm, clock=clock)
    await scheduler.load()
    await scheduler.tick()

    snoozed = await scheduler.snooze(5)

    assert snoozed.enabled is True
    assert snoozed.next_snooze_at == TEST_NOW + timedelta(minutes=5)
    assert scheduler.active_reminder_id is None
    assert alarm.is_playing is False

    clock.set(TEST_NOW + timedelta(minutes=5))
    refired = await scheduler.tick()
    assert refired.id == snoozed.id
    assert refired.next_snooze_at is None
    assert refired.enabled is False


@pytest.mark.asyncio
async def test_snooze_keeps_user_disabled_repeating_reminder_off() -> None:
    """A daily reminder switched off while ringing stays off after a snooze."""
    clock = FakeClock()
    scheduler, store = _scheduler([build_reminder(repeat="daily")], clock=clock)
    await scheduler.load()
    fired = await scheduler.tick()
    await scheduler.toggle(fired.id)

    snoozed = await scheduler.snooze(5)

    assert snoozed.enabled is False
    assert snoozed.next_snooze_at == TEST_NOW + timedelta(minutes=5)
    assert store.saves[-1][0].enabled is False

    clock.set(TEST_NOW + timedelta(minutes=5))
    assert await scheduler.tick() is None


@pytest.mark.asyncio
async def test_snooze_without_active_alarm_raises() -> None:
    scheduler, _ = _scheduler([build_reminder()])
    await scheduler.load()

    with pytest.raises(NoActiveAlarmError):
        await scheduler.snooze(10)


@pytest.mark.asyncio
async def test_snooze_rejects_unlisted_duration() -> None:
    scheduler, _ = _scheduler([build_reminder()])
    await scheduler.load()
    await scheduler.tick()

    with pytest.raises(ValueError):
        await scheduler.snooze(7)


@pytest.mark.asyncio
async def test_stop_alarm_leaves_reminder_unchanged() -> None:
    alarm = RecordingAlarm()
    scheduler, _ = _scheduler([build_reminder()], alarm=alarm)
    await scheduler.load()
    fired = await scheduler.tick()

    scheduler.stop_alarm()

    assert alarm.is_playing is False
    assert scheduler.active_reminder_id is None
    assert scheduler.reminders[0] == fired


# ── Reminder management ─────────────────────────────────────


@pytest.mark.asyncio
async def test_add_toggle_delete_persist_each_change() -> None:
    scheduler, store = _scheduler([])
    await scheduler.load()

    created = await scheduler.add(ReminderCreate(title="Vitamin D", time="21:00"))
    toggled = await scheduler.toggle(created.id)
    await scheduler.delete(created.id)

    assert created.enabled is True
    assert toggled.enabled is False
    assert scheduler.list_reminders() == []
    assert len(store.saves) == 3


@pytest.mark.asyncio
async def test_delete_active_reminder_stops_alarm() -> None:
    alarm = RecordingAlarm()
    scheduler, _ = _scheduler([build_reminder()], alarm=alarm)
    await scheduler.load()
    fired = await scheduler.tick()

    await scheduler.delete(fired.id)

    assert alarm.is_playing is False
    assert scheduler.active_reminder_id is None


@pytest.mark.asyncio
async def test_unknown_reminder_id_raises() -> None:
    scheduler, _ = _scheduler([])
    await scheduler.load()

    with pytest.raises(ReminderNotFoundError):
        await scheduler.toggle("missing")
    with pytest.raises(ReminderNotFoundError):
        await scheduler.delete("missing")


@pytest.mark.asyncio
async def test_start_is_idempotent_and_stop_cancels_polling() -> None:
    scheduler, _ = _scheduler([build_reminder()])

    await scheduler.start()
    task = scheduler._task
    await scheduler.start()
    assert scheduler._task is task

    await scheduler.stop()
    assert task.cancelled() or task.done()
