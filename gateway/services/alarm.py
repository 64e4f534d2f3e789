"""
gateway/services/alarm.py

Alarm Signal Generator.
Synthesizes a repeating alert tone and drives an injected audio output.
The audio output is acquired lazily, resumed if suspended, and always
closed when the owning AlarmSignal is closed.
"""

import asyncio
from typing import Callable, Optional, Protocol

import numpy as np
import structlog

from gateway.constants import (
    ALARM_ATTACK_SEC,
    ALARM_CYCLE_SEC,
    ALARM_FADE_OUT_SEC,
    ALARM_FREQUENCY_HZ,
    ALARM_HOLD_UNTIL_SEC,
    ALARM_PEAK_GAIN,
    ALARM_RELEASE_UNTIL_SEC,
)

logger = structlog.get_logger(__name__)


class AlarmUnavailableError(RuntimeError):
    """Raised when no audio output capability is available."""


class AudioOutput(Protocol):
    """Minimal audio device surface needed by the alarm."""

    sample_rate: int
    state: str  # "running" | "suspended" | "closed"

    async def resume(self) -> None: ...

    def play(self, samples: np.ndarray) -> None: ...

    def fade_out(self, duration_sec: float) -> None: ...

    def stop(self) -> None: ...

    async def close(self) -> None: ...


def build_alarm_cycle(sample_rate: int) -> np.ndarray:
    """
    Render one alarm period as float32 samples in [-1, 1].

    Sawtooth at ALARM_FREQUENCY_HZ shaped by a linear envelope:
    quick attack to ALARM_PEAK_GAIN, hold, release to silence,
    then silence until the end of ALARM_CYCLE_SEC.
    """
    t = np.arange(int(round(sample_rate * ALARM_CYCLE_SEC))) / sample_rate
    phase = t * ALARM_FREQUENCY_HZ
    sawtooth = 2.0 * (phase - np.floor(0.5 + phase))
    envelope = np.interp(
        t,
        [0.0, ALARM_ATTACK_SEC, ALARM_HOLD_UNTIL_SEC, ALARM_RELEASE_UNTIL_SEC, ALARM_CYCLE_SEC],
        [0.0, ALARM_PEAK_GAIN, ALARM_PEAK_GAIN, 0.0, 0.0],
    )
    return (sawtooth * envelope).astype(np.float32)


class AlarmSignal:
    """
    Repeating audible alert with explicit start/stop lifecycle.

    Use as an async context manager so the audio output is released
    on every exit path:

        async with AlarmSignal(output_factory) as alarm:
            await alarm.start()
    """

    def __init__(
        self,
        output_factory: Optional[Callable[[], AudioOutput]] = None,
        cycle_sec: float = ALARM_CYCLE_SEC,
    ) -> None:
        self._output_factory = output_factory
        self._cycle_sec = cycle_sec
        self._output: Optional[AudioOutput] = None
        self._pattern_task: Optional[asyncio.Task] = None
        self._playing = False

    @property
    def is_playing(self) -> bool:
        return self._playing

    async def __aenter__(self) -> "AlarmSignal":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _ensure_output(self) -> AudioOutput:
        if self._output is None:
            if self._output_factory is None:
                raise AlarmUnavailableError("Audio output is not available on this host")
            self._output = self._output_factory()
        if self._output.state == "suspended":
            await self._output.resume()
        return self._output

    async def start(self) -> None:
        """Begin the repeating tone. No-op when already playing."""
        if self._playing:
            return
        output = await self._ensure_output()
        cycle = build_alarm_cycle(output.sample_rate)
        self._pattern_task = asyncio.create_task(self._run_pattern(output, cycle))
        self._playing = True
        logger.info("alarm_started", sample_rate=output.sample_rate)

    async def _run_pattern(self, output: AudioOutput, cycle: np.ndarray) -> None:
        while True:
            try:
                output.play(cycle)
            except Exception as exc:
                logger.warning("alarm_pattern_failed", error=str(exc))
            await asyncio.sleep(self._cycle_sec)

    def stop(self) -> None:
        """Fade out and release the tone. Safe to call when idle."""
        if self._pattern_task is not None:
            self._pattern_task.cancel()
            self._pattern_task = None
        if not self._playing:
            return
        output = self._output
        if output is not None:
            try:
                output.fade_out(ALARM_FADE_OUT_SEC)
            except Exception as exc:
                logger.warning("alarm_fade_out_failed", error=str(exc))
            try:
                output.stop()
            except Exception as exc:
                logger.warning("alarm_output_stop_failed", error=str(exc))
        self._playing = False
        logger.info("alarm_stopped")

    async def aclose(self) -> None:
        """Stop any sound and close the audio output."""
        self.stop()
        output, self._output = self._output, None
        if output is not None and output.state != "closed":
            try:
                await output.close()
            except Exception as exc:
                logger.warning("alarm_output_close_failed", error=str(exc))
