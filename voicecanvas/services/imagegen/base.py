"""
Abstract base class for image-generation providers.

All providers (OpenAI, Stability AI, ...) implement this interface so the
pipeline can illustrate a prompt without knowing which backend is used.
"""

from abc import ABC, abstractmethod


class BaseImageProvider(ABC):
    """Interface that every image provider must implement."""

    #: Human-readable name used in log messages.
    label: str = "image provider"

    @abstractmethod
    async def generate(self, prompt: str, api_key: str) -> str:
        """Generate one image for ``prompt``.

        Args:
            prompt: Text describing the image.
            api_key: Credential sent as a bearer token, used as-is.

        Returns:
            An image reference usable as an ``<img>`` source (URL or data URI).

        Raises:
            ImageGenError: On a rejected request (``status_code`` set) or a
                transport failure (``status_code`` is None).
            NoArtifactsError: When the response contains no usable image.
        """
