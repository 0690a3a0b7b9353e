"""Run orchestration: translate a recording, then illustrate the text.

One ``VoicePipeline`` serves one ``SessionState``. Each run moves strictly
forward through two stages and stops at the first failure. Every failure
is converted into a single run-log line at the stage that produced it, so
nothing raised by a stage escapes ``run()``.

Usage::

    pipeline = VoicePipeline(state)
    image_url = await pipeline.run(payload)
"""

import logging
from collections.abc import Callable

from voicecanvas.core.exceptions import (
    ImageGenError,
    NoArtifactsError,
    RunAlreadyActiveError,
    TranslationError,
    UnknownProviderError,
)
from voicecanvas.core.models import AudioPayload
from voicecanvas.core.state import SessionState
from voicecanvas.services.imagegen import BaseImageProvider, create_image_provider
from voicecanvas.services.translation import BaseTranslator, create_translator

logger = logging.getLogger(__name__)

ProviderLookup = Callable[[str], BaseImageProvider]


class VoicePipeline:
    """Sequential translate -> illustrate pipeline bound to one session.

    Args:
        state: Session state to read credentials/provider from and write results to.
        translator: Speech translator (defaults to Whisper).
        provider_lookup: Returns the image provider for a provider name
            (defaults to the image provider registry).
    """

    def __init__(
        self,
        state: SessionState,
        translator: BaseTranslator | None = None,
        provider_lookup: ProviderLookup | None = None,
    ) -> None:
        self._state = state
        self._translator = translator or create_translator()
        self._provider_lookup = provider_lookup or create_image_provider
        self._providers: dict[str, BaseImageProvider] = {}

    async def run(self, payload: AudioPayload) -> str | None:
        """Execute one run for ``payload``.

        Returns:
            The new image reference, or None if the run stopped early.
        """
        try:
            self._state.begin_run()
        except RunAlreadyActiveError:
            logger.warning("Rejected overlapping run")
            self._state.log("A run is already in progress; ignoring new audio.")
            return None

        try:
            text = await self._translate(payload)
            if text is None:
                return None
            return await self._illustrate(text)
        finally:
            self._state.end_run()

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def _translate(self, payload: AudioPayload) -> str | None:
        api_key = self._state.credentials.openai_api_key
        try:
            text = await self._translator.translate(payload, api_key)
        except TranslationError as exc:
            if exc.status_code is not None:
                self._state.set_translation_failed()
                self._state.log(f"Error translating audio: HTTP status {exc.status_code}")
            else:
                self._state.log(f"Error translating audio: {exc.detail}")
            return None
        except Exception as exc:
            logger.exception("Unexpected translation failure")
            self._state.log(f"Error translating audio: {exc}")
            return None

        self._state.set_translation(text)
        self._state.log("Translation completed.")
        return text

    async def _illustrate(self, text: str) -> str | None:
        provider_name = str(self._state.provider)
        try:
            provider = self._get_provider(provider_name)
        except UnknownProviderError as exc:
            self._state.log(f"Error generating image: {exc.detail}")
            return None
        except Exception as exc:
            logger.exception("Could not build image provider %r", provider_name)
            self._state.log(f"Error generating image: {exc}")
            return None

        self._state.log(f"Generating image with {provider.label}...")
        api_key = self._state.credentials.for_provider(provider_name)
        if not api_key:
            logger.warning("No API key entered for image provider %r", provider_name)
        try:
            image_url = await provider.generate(text, api_key)
        except NoArtifactsError:
            self._state.log(f"No image artifacts returned by {provider.label}.")
            return None
        except ImageGenError as exc:
            if exc.status_code is not None:
                self._state.log(f"Error generating image: HTTP status {exc.status_code}")
            else:
                self._state.log(f"Error generating image: {exc.detail}")
            return None
        except Exception as exc:
            logger.exception("Unexpected image generation failure (%s)", provider.label)
            self._state.log(f"Error generating image: {exc}")
            return None

        self._state.set_image(image_url)
        self._state.log(f"Image generated successfully with {provider.label}.")
        return image_url

    def _get_provider(self, name: str) -> BaseImageProvider:
        if name not in self._providers:
            self._providers[name] = self._provider_lookup(name)
        return self._providers[name]
