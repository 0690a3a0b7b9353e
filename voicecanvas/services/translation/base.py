"""
Abstract base class for speech-translation providers.
"""

from abc import ABC, abstractmethod

from voicecanvas.core.models import AudioPayload


class BaseTranslator(ABC):
    """Interface that every speech-to-English provider must implement."""

    @abstractmethod
    async def translate(self, payload: AudioPayload, api_key: str) -> str:
        """Translate recorded speech into English text.

        Args:
            payload: The finished recording.
            api_key: Credential sent as a bearer token, used as-is.

        Returns:
            The recognised text.

        Raises:
            TranslationError: On a non-200 response (``status_code`` set) or
                a transport failure (``status_code`` is None).
        """
