"""
gateway/schemas.py

Pydantic data models for the gateway layer.
- Reminder / ReminderCreate: medication reminders (persisted with camelCase keys)
- SnoozeRequest / SchedulerStatus: alarm control payloads
- PollutantConcentrations / AirQualitySample / AqiCategory / AirQualityReport: air quality
- SymptomRequest / SymptomAnalysis: symptom triage input and result
- EmergencyContact / FirstAidTopic: emergency reference data
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from gateway.constants import SNOOZE_CHOICES_MIN

RepeatMode = Literal["none", "daily", "weekly"]
Severity = Literal["mild", "moderate", "severe"]

_HOURS_PER_DAY: int = 24
_MINUTES_PER_HOUR: int = 60
_DAYS_PER_WEEK: int = 7


class ReminderBase(BaseModel):
    """Fields shared by stored reminders and creation requests."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    time: str  # "HH:MM", 24h
    enabled: bool = True
    repeat: RepeatMode = "daily"
    days_of_week: Optional[list[int]] = None  # 0=Sunday .. 6=Saturday

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value

    @field_validator("time")
    @classmethod
    def _time_is_hh_mm(cls, value: str) -> str:
        hours, sep, minutes = value.partition(":")
        if (
            sep != ":"
            or len(hours) != 2
            or len(minutes) != 2
            or not hours.isdigit()
            or not minutes.isdigit()
            or int(hours) >= _HOURS_PER_DAY
            or int(minutes) >= _MINUTES_PER_HOUR
        ):
            raise ValueError("time must be HH:MM in 24-hour form")
        return value

    @field_validator("days_of_week")
    @classmethod
    def _days_in_range(cls, value: Optional[list[int]]) -> Optional[list[int]]:
        if value is None:
            return None
        if any(day < 0 or day >= _DAYS_PER_WEEK for day in value):
            raise ValueError("days_of_week values must be between 0 and 6")
        return sorted(set(value))

    @model_validator(mode="after")
    def _days_only_for_weekly(self) -> "ReminderBase":
        if self.repeat == "weekly" and self.days_of_week is None:
            raise ValueError("weekly reminders require days_of_week")
        if self.repeat != "weekly" and self.days_of_week is not None:
            raise ValueError("days_of_week is only allowed for weekly reminders")
        return self


class ReminderCreate(ReminderBase):
    """Request body for creating a reminder. The id is assigned server-side."""


class Reminder(ReminderBase):
    """A scheduled medication alert as held in memory and in the store."""

    id: str
    enabled: bool
    repeat: RepeatMode
    last_triggered_key: Optional[str] = None  # "YYYY-MM-DD-HH:MM"
    next_snooze_at: Optional[datetime] = None

    @field_validator("next_snooze_at")
    @classmethod
    def _snooze_in_local_time(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Epoch milliseconds and "Z" strings parse as UTC; the scheduler clock is local naive
        if value is not None and value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value


class SnoozeRequest(BaseModel):
    """Snooze the active alarm by one of the allowed durations."""

    minutes: int

    @field_validator("minutes")
    @classmethod
    def _allowed_choice(cls, value: int) -> int:
        if value not in SNOOZE_CHOICES_MIN:
            raise ValueError(f"minutes must be one of {SNOOZE_CHOICES_MIN}")
        return value


class SchedulerStatus(BaseModel):
    """Current alarm state as seen by the reminders page."""

    active_reminder_id: Optional[str]
    alarm_playing: bool
    alarm_error: Optional[str] = None


class PollutantConcentrations(BaseModel):
    """Pollutant concentrations in µg/m³, as reported by the provider."""

    pm2_5: Optional[float] = None
    pm10: Optional[float] = None
    o3: Optional[float] = None
    no2: Optional[float] = None
    so2: Optional[float] = None
    co: Optional[float] = None


class AirQualitySample(BaseModel):
    """Point-in-time pollutant reading tied to a country code."""

    country_code: str = ""
    components: PollutantConcentrations


class AqiCategory(BaseModel):
    """Computed index plus its qualitative band under one national standard."""

    aqi: Optional[int]  # None means no sub-index could be computed
    standard: Literal["US", "India"]
    label: str
    severity: str
    recommendation: str
    dominant_pollutant: Optional[str] = None
    sub_indices: dict[str, int] = {}


class AirQualityReport(BaseModel):
    """Air quality for a resolved place, as returned to the dashboard."""

    place: str
    country_code: str
    provider_index: Optional[int] = None  # OpenWeather 1-5 scale
    components: PollutantConcentrations
    category: AqiCategory


class SymptomRequest(BaseModel):
    """Free-text symptom description submitted by the user."""

    symptoms: str


class SymptomAnalysis(BaseModel):
    """Best-effort, non-diagnostic triage result."""

    possible_conditions: list[str]
    recommendations: list[str]
    severity: Severity
    advice: str
    source: Literal["remote", "fallback"] = "fallback"


class EmergencyContact(BaseModel):
    """Emergency number resolved for the caller's country."""

    country_code: str
    emergency_number: str


class FirstAidTopic(BaseModel):
    """One first-aid reference entry."""

    title: str
    description: str
    keywords: list[str]
    steps: list[str]
    important_notes: list[str]
    when_to_call: list[str]
