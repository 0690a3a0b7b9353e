"""OpenAI Whisper speech translation over plain HTTP.

Uploads the recording as multipart form data to the ``audio/translations``
endpoint and returns the English text from the JSON response.
"""

import logging

import httpx

from voicecanvas.core.config import get_settings
from voicecanvas.core.exceptions import TranslationError
from voicecanvas.core.models import AudioPayload
from voicecanvas.services.translation.base import BaseTranslator

logger = logging.getLogger(__name__)


class WhisperTranslator(BaseTranslator):
    """Speech-to-English translation via the OpenAI Whisper API.

    Args:
        url: Translation endpoint (falls back to settings).
        model: Model identifier sent in the form (falls back to settings).
        timeout: Request timeout in seconds; None falls back to settings.
        transport: Optional httpx transport, used by tests to fake the API.
        settings: Optional Settings instance (defaults to get_settings()).
    """

    def __init__(
        self,
        url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        settings=None,
    ) -> None:
        self._settings = settings or get_settings()
        self._url = url or self._settings.translation_url
        self._model = model or self._settings.translation_model
        self._timeout = timeout if timeout is not None else self._settings.request_timeout_s
        self._transport = transport

    async def translate(self, payload: AudioPayload, api_key: str) -> str:
        """Upload ``payload`` and return the translated text."""
        files = {"file": (payload.filename, payload.data, payload.content_type)}
        data = {"model": self._model}
        headers = {"Authorization": f"Bearer {api_key}"}

        logger.info("Sending %d bytes to %s (model=%s)", payload.size, self._url, self._model)
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._url, files=files, data=data, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("Translation request failed: %s", exc)
            raise TranslationError(detail=str(exc) or type(exc).__name__) from exc

        logger.info("Translation response: HTTP %s", response.status_code)
        if response.status_code != 200:
            raise TranslationError(
                detail=f"HTTP status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            text = response.json()["text"]
        except (ValueError, KeyError, TypeError) as exc:
            raise TranslationError(detail=f"Malformed translation response: {exc}") from exc
        if not isinstance(text, str):
            raise TranslationError(detail="Malformed translation response: 'text' is not a string")
        return text
