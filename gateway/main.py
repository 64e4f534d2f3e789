"""
gateway/main.py

FastAPI application entry point for the MediLink gateway.
The lifespan owns the alarm signal and the reminder scheduler so the polling
task and the audio output are released on every shutdown path.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI

from config import settings
from db.models import init_models
from gateway.routers.air_quality import router as air_quality_router
from gateway.routers.emergency import router as emergency_router
from gateway.routers.reminders import router as reminders_router
from gateway.routers.symptoms import router as symptoms_router
from gateway.services.alarm import AlarmSignal
from gateway.services.audio import pyaudio_output_factory
from gateway.services.persistence import ReminderStore
from gateway.services.scheduler import ReminderScheduler

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle: storage, alarm and scheduler."""
    logger.info("gateway_starting", port=8000)
    await init_models()

    # Without a sound device, alarms fall back to push notifications
    output_factory = pyaudio_output_factory if settings.alarm_audio_enabled else None
    async with AlarmSignal(output_factory) as alarm:
        scheduler = ReminderScheduler(ReminderStore(), alarm)
        app.state.scheduler = scheduler
        await scheduler.start()
        try:
            yield
        finally:
            await scheduler.stop()
            logger.info("gateway_shutting_down")


app = FastAPI(
    title="MediLink Gateway",
    description="Medication reminders, air quality and symptom triage service",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(reminders_router)
app.include_router(air_quality_router)
app.include_router(symptoms_router)
app.include_router(emergency_router)
