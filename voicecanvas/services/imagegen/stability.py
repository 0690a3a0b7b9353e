"""Stability AI text-to-image generation over plain HTTP.

The shape of a successful response is not pinned down: the parser that
pulls the image reference out of the JSON body is pluggable. Two parsers
ship with the app:

- ``parse_artifact_url`` reads ``artifacts[0].url``;
- ``parse_artifact_base64`` reads ``artifacts[0].base64`` and returns a
  ``data:image/png;base64,...`` URI.

Pick one with ``Settings.stability_artifact_field`` or pass any callable
taking the decoded body and returning a reference (or None).
"""

import logging
from collections.abc import Callable

import httpx

from voicecanvas.core.config import get_settings
from voicecanvas.core.exceptions import ImageGenError, NoArtifactsError
from voicecanvas.services.imagegen.base import BaseImageProvider

logger = logging.getLogger(__name__)

ArtifactParser = Callable[[object], str | None]


def _first_artifact(body: object) -> dict | None:
    if not isinstance(body, dict):
        return None
    artifacts = body.get("artifacts")
    if not isinstance(artifacts, list) or not artifacts:
        return None
    first = artifacts[0]
    return first if isinstance(first, dict) else None


def parse_artifact_url(body: object) -> str | None:
    """Return ``artifacts[0].url`` or None."""
    artifact = _first_artifact(body)
    if artifact is None:
        return None
    return artifact.get("url") or None


def parse_artifact_base64(body: object) -> str | None:
    """Return ``artifacts[0].base64`` as a PNG data URI, or None."""
    artifact = _first_artifact(body)
    if artifact is None:
        return None
    encoded = artifact.get("base64")
    if not encoded:
        return None
    return f"data:image/png;base64,{encoded}"


ARTIFACT_PARSERS: dict[str, ArtifactParser] = {
    "url": parse_artifact_url,
    "base64": parse_artifact_base64,
}


def get_artifact_parser(field: str) -> ArtifactParser:
    """Look up a built-in parser by artifact field name.

    Raises:
        ValueError: If ``field`` has no registered parser.
    """
    try:
        return ARTIFACT_PARSERS[field]
    except KeyError:
        raise ValueError(
            f"Unknown Stability artifact field: {field!r} "
            f"(expected one of {sorted(ARTIFACT_PARSERS)})"
        ) from None


class StabilityImageProvider(BaseImageProvider):
    """Image provider for the Stability AI v1 text-to-image endpoint.

    Any 2xx status counts as success.

    Args:
        url: Generation endpoint (falls back to settings).
        parser: Callable extracting the image reference from the JSON body.
            Defaults to the parser named by ``settings.stability_artifact_field``.
        timeout: Request timeout in seconds; None falls back to settings.
        transport: Optional httpx transport, used by tests to fake the API.
        settings: Optional Settings instance (defaults to get_settings()).
    """

    label = "StabilityAI"

    def __init__(
        self,
        url: str | None = None,
        parser: ArtifactParser | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        settings=None,
    ) -> None:
        self._settings = settings or get_settings()
        self._url = url or self._settings.stability_image_url
        self._parser = parser or get_artifact_parser(self._settings.stability_artifact_field)
        self._timeout = timeout if timeout is not None else self._settings.request_timeout_s
        self._transport = transport

    def build_body(self, prompt: str) -> dict:
        s = self._settings
        return {
            "steps": s.stability_steps,
            "width": s.stability_width,
            "height": s.stability_height,
            "seed": s.stability_seed,
            "cfg_scale": s.stability_cfg_scale,
            "samples": s.stability_samples,
            "text_prompts": [{"text": prompt, "weight": 1}],
        }

    async def generate(self, prompt: str, api_key: str) -> str:
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._url, json=self.build_body(prompt), headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("Stability image request failed: %s", exc)
            raise ImageGenError(detail=str(exc) or type(exc).__name__, provider=self.label) from exc

        logger.info("Stability image response: HTTP %s", response.status_code)
        if not response.is_success:
            raise ImageGenError(
                detail=f"HTTP status {response.status_code}",
                status_code=response.status_code,
                provider=self.label,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise NoArtifactsError(provider=self.label) from exc

        try:
            reference = self._parser(body)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning("Stability artifact parser rejected the response: %r", exc)
            raise NoArtifactsError(provider=self.label) from exc
        if not reference:
            raise NoArtifactsError(provider=self.label)
        return reference
