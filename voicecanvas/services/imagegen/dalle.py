"""OpenAI DALL·E image generation over plain HTTP."""

import logging

import httpx

from voicecanvas.core.config import get_settings
from voicecanvas.core.exceptions import ImageGenError, NoArtifactsError
from voicecanvas.services.imagegen.base import BaseImageProvider

logger = logging.getLogger(__name__)


class DalleImageProvider(BaseImageProvider):
    """Image provider for the OpenAI ``images/generations`` endpoint.

    Success is exactly HTTP 200; the image reference is ``data[0].url``.
    """

    label = "OpenAI"

    def __init__(
        self,
        url: str | None = None,
        model: str | None = None,
        size: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        settings=None,
    ) -> None:
        self._settings = settings or get_settings()
        self._url = url or self._settings.openai_image_url
        self._model = model or self._settings.openai_image_model
        self._size = size or self._settings.openai_image_size
        self._timeout = timeout if timeout is not None else self._settings.request_timeout_s
        self._transport = transport

    def build_body(self, prompt: str) -> dict:
        return {
            "model": self._model,
            "prompt": prompt,
            "n": 1,
            "size": self._size,
        }

    async def generate(self, prompt: str, api_key: str) -> str:
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._url, json=self.build_body(prompt), headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("OpenAI image request failed: %s", exc)
            raise ImageGenError(detail=str(exc) or type(exc).__name__, provider=self.label) from exc

        logger.info("OpenAI image response: HTTP %s", response.status_code)
        if response.status_code != 200:
            raise ImageGenError(
                detail=f"HTTP status {response.status_code}",
                status_code=response.status_code,
                provider=self.label,
            )

        try:
            url = response.json()["data"][0]["url"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise NoArtifactsError(provider=self.label) from exc
        if not url:
            raise NoArtifactsError(provider=self.label)
        return url
