"""Microphone capture.

``MicrophoneRecorder`` owns the sounddevice input stream and accumulates
int16 blocks from the PortAudio callback thread. ``CaptureController``
drives it from the UI: start opens the device, stop releases it, builds
one ``AudioPayload`` and hands it downstream exactly once.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

import numpy as np

from voicecanvas.core.exceptions import DeviceError
from voicecanvas.core.models import AudioPayload, RecordingStatus
from voicecanvas.core.state import SessionState
from voicecanvas.services.audio.processor import AudioProcessor

logger = logging.getLogger(__name__)

PayloadCallback = Callable[[AudioPayload], None]


def _load_sounddevice():
    """Import sounddevice on first use.

    The import itself fails with ``OSError`` when the PortAudio library is
    missing, which for this app simply means there is no usable microphone.
    """
    try:
        import sounddevice
    except OSError as exc:
        raise DeviceError(f"PortAudio is not available: {exc}") from exc
    return sounddevice


class MicrophoneRecorder:
    """Continuous int16 microphone recorder backed by ``sounddevice.InputStream``.

    Args:
        sample_rate: Capture rate in Hz.
        channels: Number of input channels.
    """

    def __init__(self, sample_rate: int = 16000, channels: int = 1) -> None:
        self.sample_rate = sample_rate
        self.channels = channels
        self._stream: Any = None
        self._chunks: list[np.ndarray] = []
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    def open(self) -> None:
        """Acquire the microphone and start capturing.

        Raises:
            DeviceError: If the device is missing, busy or access is denied.
        """
        sd = _load_sounddevice()
        with self._lock:
            self._chunks = []
        try:
            stream = sd.InputStream(
                samplerate=self.sample_rate,
                channels=self.channels,
                dtype="int16",
                callback=self._on_audio,
            )
        except (sd.PortAudioError, ValueError) as exc:
            raise DeviceError(str(exc)) from exc
        try:
            stream.start()
        except sd.PortAudioError as exc:
            stream.close()
            raise DeviceError(str(exc)) from exc
        self._stream = stream
        logger.debug("Microphone opened (rate=%s, channels=%s)", self.sample_rate, self.channels)

    def close(self) -> list[np.ndarray]:
        """Release the microphone and return every captured block in order.

        The stream is closed even if stopping it fails.
        """
        stream, self._stream = self._stream, None
        if stream is not None:
            try:
                stream.stop()
            finally:
                stream.close()
                logger.debug("Microphone released")
        with self._lock:
            chunks, self._chunks = self._chunks, []
        return chunks

    def _on_audio(self, indata: Any, frames: int, time_info: Any, status: Any) -> None:
        if status:
            logger.debug("Input stream status: %s", status)
        with self._lock:
            self._chunks.append(np.array(indata, dtype=np.int16, copy=True))


class CaptureController:
    """Start/stop toggle for one recording at a time.

    Args:
        state: The session state to update and log into.
        on_payload: Called once with the finished payload after each stop.
        recorder: Microphone recorder (defaults to ``MicrophoneRecorder``).
        processor: Chunk-to-WAV encoder (defaults to ``AudioProcessor``).
    """

    def __init__(
        self,
        state: SessionState,
        on_payload: PayloadCallback | None = None,
        recorder: MicrophoneRecorder | None = None,
        processor: AudioProcessor | None = None,
    ) -> None:
        self._state = state
        self._on_payload = on_payload
        self._recorder = recorder or MicrophoneRecorder()
        self._processor = processor or AudioProcessor(
            sample_rate=self._recorder.sample_rate,
            channels=self._recorder.channels,
        )

    def bind(self, state: SessionState, on_payload: PayloadCallback | None) -> None:
        """Point the controller at the current state and downstream callback."""
        self._state = state
        self._on_payload = on_payload

    def start(self) -> bool:
        """Open the microphone. Returns True if recording started."""
        if self._state.is_recording:
            self._state.log("Recording already in progress.")
            return False

        self._state.log("Starting recording...")
        try:
            self._recorder.open()
        except DeviceError as exc:
            logger.warning("Microphone unavailable: %s", exc.detail)
            self._state.log(f"Error accessing the microphone: {exc.detail}")
            return False

        self._state.mark_recording(RecordingStatus.active)
        self._state.log("Recording started.")
        return True

    def stop(self) -> AudioPayload | None:
        """Stop capturing, release the device and hand the payload downstream.

        The state goes idle before the payload is assembled.
        """
        if not self._state.is_recording:
            self._state.log("No active recording to stop.")
            return None

        self._state.mark_recording(RecordingStatus.idle)
        self._state.log("Stopping recording...")

        try:
            chunks = self._recorder.close()
            payload = self._processor.build_payload(chunks)
        except Exception as exc:
            logger.exception("Failed to finalize recording")
            self._state.log(f"Error finalizing recording: {exc}")
            return None

        logger.info(
            "Captured %.1fs of audio (%d bytes)",
            self._processor.duration(chunks),
            payload.size,
        )
        self._state.log("Recording stopped. Translating audio...")
        self._handoff(payload)
        return payload

    def accept_upload(self, data: bytes, filename: str, content_type: str) -> AudioPayload:
        """Take a finished recording made elsewhere (e.g. the browser) and hand it on."""
        payload = AudioPayload(data=data, filename=filename, content_type=content_type)
        self._state.log("Recording received. Translating audio...")
        self._handoff(payload)
        return payload

    def _handoff(self, payload: AudioPayload) -> None:
        self._state.set_payload(payload)
        if self._on_payload is not None:
            self._on_payload(payload)
