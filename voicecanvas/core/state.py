"""
Session state owned by the presentation layer.

``SessionState`` is the single object the UI keeps between reruns. The
capture controller and the pipeline receive it by reference and only
change it through the methods defined here.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from voicecanvas.core.exceptions import RunAlreadyActiveError
from voicecanvas.core.models import AudioPayload, Credentials, Provider, RecordingStatus

logger = logging.getLogger(__name__)

TRANSLATION_ERROR_TEXT = "Error translating audio."


class RunLog:
    """Append-only, order-preserving list of human-readable messages."""

    def __init__(self) -> None:
        self._entries: list[str] = []

    def append(self, message: str) -> None:
        self._entries.append(str(message))

    def snapshot(self) -> tuple[str, ...]:
        """Return an immutable copy of the entries for rendering or comparison."""
        return tuple(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> str:
        return self._entries[index]


@dataclass
class SessionState:
    """Everything one browser session knows about its runs.

    Attributes:
        credentials: API keys typed by the user.
        provider: Image provider used for the next illustrate step.
        recording: Whether the microphone is currently capturing.
        translation: Last translation text (or the fixed error text).
        image_url: Last generated image reference; kept when a later run fails.
        last_payload: Most recent finished recording, for playback.
        run_in_flight: True while a translate/illustrate run is executing.
        log_entries: The run log shown to the user.
    """

    credentials: Credentials = field(default_factory=Credentials)
    provider: Provider = Provider.openai
    recording: RecordingStatus = RecordingStatus.idle
    translation: str | None = None
    image_url: str | None = None
    last_payload: AudioPayload | None = None
    run_in_flight: bool = False
    log_entries: RunLog = field(default_factory=RunLog)

    # -- log --

    def log(self, message: str) -> None:
        """Append ``message`` to the run log and mirror it to Python logging."""
        self.log_entries.append(message)
        logger.info("%s", message)

    # -- recording --

    @property
    def is_recording(self) -> bool:
        return self.recording == RecordingStatus.active

    def mark_recording(self, status: RecordingStatus) -> None:
        self.recording = status

    # -- run guard --

    def begin_run(self) -> None:
        """Claim the in-flight token.

        Raises:
            RunAlreadyActiveError: If another run has not finished yet.
        """
        if self.run_in_flight:
            raise RunAlreadyActiveError()
        self.run_in_flight = True

    def end_run(self) -> None:
        self.run_in_flight = False

    # -- results --

    def set_translation(self, text: str) -> None:
        self.translation = text

    def set_translation_failed(self) -> None:
        self.translation = TRANSLATION_ERROR_TEXT

    def set_image(self, url: str) -> None:
        self.image_url = url

    def set_payload(self, payload: AudioPayload) -> None:
        self.last_payload = payload
