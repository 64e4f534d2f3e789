"""
gateway/services/audio.py

PyAudio-backed AudioOutput for hosts with a sound device.
The stream runs in callback mode: play() only queues samples, and PortAudio's
thread pulls them, so the event loop never blocks on device writes.
Enabled with ALARM_AUDIO_ENABLED; without it the gateway stays headless.
"""

import threading
from typing import Any, Optional

import numpy as np
import structlog

from config import settings
from gateway.services.alarm import AlarmUnavailableError

logger = structlog.get_logger(__name__)


class PyAudioOutput:
    """Mono float32 output stream fed from an in-memory sample queue."""

    def __init__(
        self,
        sample_rate: int,
        device_index: Optional[int] = None,
        backend: Any = None,
    ) -> None:
        if backend is None:
            import pyaudio as backend

        self._backend = backend
        self.sample_rate = sample_rate
        self._lock = threading.Lock()
        self._pending = np.zeros(0, dtype=np.float32)
        self._fading = False

        self._pa = backend.PyAudio()
        try:
            self._stream = self._pa.open(
                format=backend.paFloat32,
                channels=1,
                rate=sample_rate,
                output=True,
                output_device_index=device_index,
                stream_callback=self._fill,
                start=False,
            )
        except Exception:
            self._pa.terminate()
            raise
        self.state = "suspended"

    def _fill(self, in_data, frame_count, time_info, status):
        with self._lock:
            chunk = self._pending[:frame_count]
            self._pending = self._pending[frame_count:]
        if len(chunk) < frame_count:
            chunk = np.concatenate([chunk, np.zeros(frame_count - len(chunk), dtype=np.float32)])
        return chunk.astype(np.float32).tobytes(), self._backend.paContinue

    async def resume(self) -> None:
        self._stream.start_stream()
        self.state = "running"

    def play(self, samples: np.ndarray) -> None:
        with self._lock:
            self._fading = False
            self._pending = np.concatenate([self._pending, samples.astype(np.float32)])

    def fade_out(self, duration_sec: float) -> None:
        """Ramp whatever is queued to silence over duration_sec and drop the rest."""
        length = int(duration_sec * self.sample_rate)
        with self._lock:
            tail = self._pending[:length]
            self._pending = (tail * np.linspace(1.0, 0.0, len(tail))).astype(np.float32)
            self._fading = True

    def stop(self) -> None:
        # A faded tail is left to drain; anything else is cut
        with self._lock:
            if not self._fading:
                self._pending = np.zeros(0, dtype=np.float32)

    async def close(self) -> None:
        try:
            if self._stream.is_active():
                self._stream.stop_stream()
            self._stream.close()
        finally:
            self._pa.terminate()
            self.state = "closed"


def pyaudio_output_factory() -> PyAudioOutput:
    """Open the configured device, or raise AlarmUnavailableError."""
    try:
        return PyAudioOutput(
            sample_rate=settings.alarm_sample_rate,
            device_index=settings.alarm_audio_device_index,
        )
    except ImportError as exc:
        logger.warning("audio_backend_missing", error=str(exc))
        raise AlarmUnavailableError("PyAudio is not installed on this host") from exc
    except Exception as exc:
        logger.warning("audio_device_open_failed", error=str(exc))
        raise AlarmUnavailableError(f"Audio device could not be opened: {exc}") from exc
