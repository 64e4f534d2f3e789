"""
tests/fixtures.py

Shared test data and helper functions for constructing test payloads.
All tests must use these fixtures instead of hardcoding test values.
"""

from datetime import datetime
from typing import Optional

import numpy as np
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db.models import init_models
from gateway.schemas import AirQualitySample, PollutantConcentrations, Reminder


def build_reminder(
    reminder_id: str = "rem_001",
    title: str = "Metformin 500mg",
    time: str = "08:30",
    enabled: bool = True,
    repeat: str = "daily",
    days_of_week: Optional[list[int]] = None,
    last_triggered_key: Optional[str] = None,
    next_snooze_at: Optional[datetime] = None,
) -> Reminder:
    """Build a Reminder with sensible defaults for testing."""
    if repeat == "weekly" and days_of_week is None:
        days_of_week = [1, 3, 5]
    return Reminder(
        id=reminder_id,
        title=title,
        time=time,
        enabled=enabled,
        repeat=repeat,
        days_of_week=days_of_week,
        last_triggered_key=last_triggered_key,
        next_snooze_at=next_snooze_at,
    )


def build_sample(
    pm2_5: Optional[float] = None,
    pm10: Optional[float] = None,
    country_code: str = "US",
) -> AirQualitySample:
    """Build an AirQualitySample holding only particulate readings."""
    return AirQualitySample(
        country_code=country_code,
        components=PollutantConcentrations(pm2_5=pm2_5, pm10=pm10),
    )


def build_air_pollution_response(
    pm2_5: float = 25.9,
    pm10: float = 43.2,
    provider_index: int = 2,
) -> dict:
    """OpenWeather /data/2.5/air_pollution response body."""
    return {
        "coord": {"lon": 116.4074, "lat": 39.9042},
        "list": [
            {
                "main": {"aqi": provider_index},
                "components": {
                    "co": 230.31,
                    "no2": 12.5,
                    "o3": 68.66,
                    "so2": 3.1,
                    "pm2_5": pm2_5,
                    "pm10": pm10,
                },
                "dt": 1718429400,
            }
        ],
    }


def build_geocode_response(
    name: str = "Pune",
    state: Optional[str] = "Maharashtra",
    country: str = "IN",
    lat: float = 18.5204,
    lon: float = 73.8567,
) -> list[dict]:
    """OpenWeather /geo/1.0 direct or reverse response body."""
    entry = {"name": name, "country": country, "lat": lat, "lon": lon}
    if state is not None:
        entry["state"] = state
    return [entry]


# ── Clock and audio fakes ───────────────────────────────────


class FakeClock:
    """Settable clock passed to the scheduler in place of datetime.now."""

    def __init__(self, now: Optional[datetime] = None) -> None:
        self.now = now or TEST_NOW

    def __call__(self) -> datetime:
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now


class FakeAudioOutput:
    """Records calls made by AlarmSignal instead of producing sound."""

    def __init__(self, sample_rate: int = 8000, state: str = "running") -> None:
        self.sample_rate = sample_rate
        self.state = state
        self.played: list[np.ndarray] = []
        self.resumed = 0
        self.fade_outs: list[float] = []
        self.stopped = 0

    async def resume(self) -> None:
        self.resumed += 1
        self.state = "running"

    def play(self, samples: np.ndarray) -> None:
        self.played.append(samples)

    def fade_out(self, duration_sec: float) -> None:
        self.fade_outs.append(duration_sec)

    def stop(self) -> None:
        self.stopped += 1

    async def close(self) -> None:
        self.state = "closed"


class RecordingAlarm:
    """Stands in for AlarmSignal in scheduler tests."""

    def __init__(self, start_error: Optional[Exception] = None) -> None:
        self.start_error = start_error
        self.is_playing = False
        self.starts = 0
        self.stops = 0

    async def start(self) -> None:
        self.starts += 1
        if self.start_error is not None:
            raise self.start_error
        self.is_playing = True

    def stop(self) -> None:
        self.stops += 1
        self.is_playing = False


class MemoryStore:
    """In-memory ReminderStore double that records every checkpoint."""

    def __init__(self, reminders: Optional[list[Reminder]] = None) -> None:
        self.reminders = list(reminders or [])
        self.saves: list[list[Reminder]] = []

    async def load(self) -> list[Reminder]:
        return list(self.reminders)

    async def save(self, reminders: list[Reminder]) -> bool:
        self.saves.append(list(reminders))
        return True


async def build_session_factory() -> sessionmaker:
    """Fresh in-memory SQLite database with the schema created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_models(engine)
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# ── Test clock values ───────────────────────────────────────

# Saturday 2024-06-15 08:30 local time
TEST_NOW: datetime = datetime(2024, 6, 15, 8, 30, 0)
TEST_KEY: str = "2024-06-15-08:30"
TEST_WEEKDAY: int = 6
