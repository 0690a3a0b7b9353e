"""
VoiceCanvas exception hierarchy.

All application-specific exceptions inherit from VoiceCanvasError so the
orchestration boundary can turn any of them into a single run-log line.
"""

from datetime import UTC, datetime


class VoiceCanvasError(Exception):
    """Base exception for all VoiceCanvas errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "VOICECANVAS_ERROR",
        status_code: int | None = None,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class DeviceError(VoiceCanvasError):
    """Raised when the microphone is unavailable or access is denied."""

    def __init__(self, detail: str = "Microphone unavailable") -> None:
        super().__init__(detail=detail, code="DEVICE_ERROR")


class RunAlreadyActiveError(VoiceCanvasError):
    """Raised when a translate/illustrate run is requested while one is in flight."""

    def __init__(self) -> None:
        super().__init__(
            detail="A run is already in progress",
            code="RUN_ALREADY_ACTIVE",
        )


class TranslationError(VoiceCanvasError):
    """Raised when the speech-translation request fails.

    ``status_code`` is the HTTP status of a rejected request, or ``None``
    when the request never produced a response (transport failure).
    """

    def __init__(self, detail: str = "Translation failed", status_code: int | None = None) -> None:
        super().__init__(detail=detail, code="TRANSLATION_ERROR", status_code=status_code)


class ImageGenError(VoiceCanvasError):
    """Raised when an image provider rejects the request or cannot be reached."""

    def __init__(
        self,
        detail: str = "Image generation failed",
        status_code: int | None = None,
        provider: str = "",
    ) -> None:
        self.provider = provider
        super().__init__(detail=detail, code="IMAGE_GEN_ERROR", status_code=status_code)


class NoArtifactsError(VoiceCanvasError):
    """Raised when an image provider answers successfully but without a usable image."""

    def __init__(self, provider: str = "") -> None:
        self.provider = provider
        super().__init__(
            detail=f"No image artifacts returned by {provider or 'provider'}",
            code="NO_ARTIFACTS",
        )


class UnknownProviderError(VoiceCanvasError):
    """Raised when no image provider is registered under the requested name."""

    def __init__(self, provider: str) -> None:
        super().__init__(
            detail=f"Unknown image provider: {provider}",
            code="UNKNOWN_PROVIDER",
        )
