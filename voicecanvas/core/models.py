"""
Pydantic v2 models and enums shared by the capture, translation and
image-generation layers.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Provider(StrEnum):
    """Image-generation backends selectable in the UI."""

    openai = "openai"
    stability = "stability"

    @property
    def label(self) -> str:
        """Human-readable name used in run-log messages."""
        return _PROVIDER_LABELS[self]


_PROVIDER_LABELS = {
    Provider.openai: "OpenAI",
    Provider.stability: "StabilityAI",
}


class RecordingStatus(StrEnum):
    """Microphone capture state."""

    idle = "idle"
    active = "active"


# ---------------------------------------------------------------------------
# Capture
# ---------------------------------------------------------------------------


class AudioPayload(BaseModel):
    """One finished recording, ready to upload.

    Immutable once built; the capture stage creates it and hands it to
    the translation stage exactly once.
    """

    model_config = ConfigDict(frozen=True)

    data: bytes
    filename: str = "audio.webm"
    content_type: str = "audio/webm"

    @property
    def size(self) -> int:
        return len(self.data)


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


class Credentials(BaseModel):
    """Per-session API keys as typed by the user. Never validated or persisted."""

    openai_api_key: str = ""
    stability_api_key: str = ""
    extra_keys: dict[str, str] = {}

    def for_provider(self, provider: str) -> str:
        """Return the key used to authenticate against ``provider``.

        Providers registered beyond the built-in two read their key from
        ``extra_keys`` and get an empty string when none was entered.
        """
        if provider == Provider.openai:
            return self.openai_api_key
        if provider == Provider.stability:
            return self.stability_api_key
        return self.extra_keys.get(provider, "")
