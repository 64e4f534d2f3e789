"""
config.py

Centralized configuration management using pydantic-settings.
All modules must import settings from this file.
Direct os.getenv() calls are prohibited elsewhere.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings loaded from .env file."""

    # Database (holds the reminder key/value store)
    database_url: str = "sqlite+aiosqlite:///./medilink.db"

    # Weather / air quality provider (OpenWeather)
    openweather_api_key: str = ""
    openweather_base_url: str = "https://api.openweathermap.org"

    # Remote symptom triage inference endpoint
    triage_inference_url: str = (
        "https://api-inference.huggingface.co/models/google/flan-t5-base"
    )
    triage_inference_token: str = ""

    # IP-based geolocation
    ip_geolocation_url: str = "https://ipapi.co/json/"
    default_country_code: str = "US"

    # Outbound HTTP
    http_timeout_sec: float = 10.0

    # Reminder scheduler
    reminder_poll_interval_sec: float = 5.0

    # Alarm audio (off on headless hosts)
    alarm_audio_enabled: bool = False
    alarm_audio_device_index: Optional[int] = None
    alarm_sample_rate: int = 44100

    # Push notifications
    fcm_server_key: str = ""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()
