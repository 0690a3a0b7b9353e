"""Unit tests for VoicePipeline (translate -> illustrate orchestration).

Translators and image providers are AsyncMocks, so these tests exercise
only the sequencing, state updates, log lines and error policy.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from voicecanvas.core.exceptions import (
    ImageGenError,
    NoArtifactsError,
    TranslationError,
    UnknownProviderError,
)
from voicecanvas.core.config import Settings
from voicecanvas.core.models import Credentials, Provider
from voicecanvas.core.state import TRANSLATION_ERROR_TEXT, SessionState
from voicecanvas.services.imagegen.base import BaseImageProvider
from voicecanvas.services.imagegen.stability import StabilityImageProvider
from voicecanvas.services.orchestrator import VoicePipeline
from voicecanvas.services.translation.base import BaseTranslator

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _mock_translator(text="a red fox"):
    translator = AsyncMock(spec=BaseTranslator)
    translator.translate.return_value = text
    return translator


def _mock_provider(label, url):
    provider = AsyncMock(spec=BaseImageProvider)
    provider.label = label
    provider.generate.return_value = url
    return provider


@pytest.fixture
def openai_provider():
    return _mock_provider("OpenAI", "https://img/1.png")


@pytest.fixture
def stability_provider():
    return _mock_provider("StabilityAI", "https://s/1.png")


@pytest.fixture
def lookup(openai_provider, stability_provider):
    providers = {"openai": openai_provider, "stability": stability_provider}

    def _lookup(name):
        if name not in providers:
            raise UnknownProviderError(name)
        return providers[name]

    return _lookup


def _pipeline(state, translator, lookup):
    return VoicePipeline(state, translator=translator, provider_lookup=lookup)


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


class TestSuccessfulRun:
    """A run that passes both stages."""

    async def test_translation_feeds_illustrate_once(self, state, payload, lookup, openai_provider):
        """The translated text is passed to exactly one illustrate call."""
        translator = _mock_translator("a red fox")
        result = await _pipeline(state, translator, lookup).run(payload)

        translator.translate.assert_awaited_once_with(payload, "sk-openai")
        openai_provider.generate.assert_awaited_once_with("a red fox", "sk-openai")
        assert state.translation == "a red fox"
        assert state.image_url == "https://img/1.png"
        assert result == "https://img/1.png"

    async def test_log_lines_in_order(self, state, payload, lookup):
        await _pipeline(state, _mock_translator(), lookup).run(payload)
        assert state.log_entries.snapshot() == (
            "Translation completed.",
            "Generating image with OpenAI...",
            "Image generated successfully with OpenAI.",
        )

    async def test_stability_uses_stability_key(
        self, state, payload, lookup, openai_provider, stability_provider
    ):
        """Provider selection picks both the backend and its credential."""
        state.provider = Provider.stability
        await _pipeline(state, _mock_translator("a red fox"), lookup).run(payload)

        stability_provider.generate.assert_awaited_once_with("a red fox", "sk-stability")
        openai_provider.generate.assert_not_awaited()
        assert state.image_url == "https://s/1.png"

    async def test_run_flag_cleared(self, state, payload, lookup):
        await _pipeline(state, _mock_translator(), lookup).run(payload)
        assert state.run_in_flight is False


# ---------------------------------------------------------------------------
# Translation failures
# ---------------------------------------------------------------------------


class TestTranslationFailure:
    """Failures in the first stage stop the run before illustrate."""

    @pytest.mark.parametrize("status", [400, 401, 500])
    async def test_status_error_sets_placeholder(self, state, payload, lookup, openai_provider, status):
        """Non-200 sets the fixed error text and logs exactly one status line."""
        translator = _mock_translator()
        translator.translate.side_effect = TranslationError("HTTP", status_code=status)

        result = await _pipeline(state, translator, lookup).run(payload)

        assert result is None
        assert state.translation == TRANSLATION_ERROR_TEXT
        openai_provider.generate.assert_not_awaited()
        status_lines = [line for line in state.log_entries if str(status) in line]
        assert status_lines == [f"Error translating audio: HTTP status {status}"]
        assert len(state.log_entries) == 1

    async def test_transport_error_keeps_translation(self, state, payload, lookup, openai_provider):
        """A transport failure logs and aborts without touching the translation."""
        state.set_translation("previous text")
        translator = _mock_translator()
        translator.translate.side_effect = TranslationError("connection refused")

        await _pipeline(state, translator, lookup).run(payload)

        assert state.translation == "previous text"
        assert state.log_entries[-1] == "Error translating audio: connection refused"
        openai_provider.generate.assert_not_awaited()

    async def test_unexpected_exception_is_contained(self, state, payload, lookup):
        """An unexpected error is logged and does not escape run()."""
        translator = _mock_translator()
        translator.translate.side_effect = RuntimeError("boom")

        assert await _pipeline(state, translator, lookup).run(payload) is None
        assert state.log_entries[-1] == "Error translating audio: boom"
        assert state.run_in_flight is False


# ---------------------------------------------------------------------------
# Illustrate failures
# ---------------------------------------------------------------------------


class TestIllustrateFailure:
    """Failures in the second stage leave the previous image untouched."""

    async def test_status_error(self, state, payload, lookup, openai_provider):
        state.set_image("https://old.png")
        openai_provider.generate.side_effect = ImageGenError("HTTP", status_code=500)

        await _pipeline(state, _mock_translator(), lookup).run(payload)

        assert state.image_url == "https://old.png"
        assert state.translation == "a red fox"
        assert state.log_entries[-1] == "Error generating image: HTTP status 500"

    async def test_transport_error(self, state, payload, lookup, openai_provider):
        openai_provider.generate.side_effect = ImageGenError("read timeout")

        await _pipeline(state, _mock_translator(), lookup).run(payload)

        assert state.image_url is None
        assert state.log_entries[-1] == "Error generating image: read timeout"

    async def test_no_artifacts(self, state, payload, lookup, stability_provider):
        state.provider = Provider.stability
        stability_provider.generate.side_effect = NoArtifactsError(provider="StabilityAI")

        await _pipeline(state, _mock_translator(), lookup).run(payload)

        assert state.image_url is None
        assert state.log_entries[-1] == "No image artifacts returned by StabilityAI."

    async def test_unknown_provider(self, state, payload):
        """A provider name with no registered backend is logged, not raised."""

        def lookup(name):
            raise UnknownProviderError(name)

        await _pipeline(state, _mock_translator(), lookup).run(payload)

        assert state.log_entries[-1] == "Error generating image: Unknown image provider: openai"

    async def test_provider_construction_failure(self, state, payload):
        """Any error while building the provider becomes one log line."""

        def lookup(name):
            raise ValueError("Unknown Stability artifact field: 'png'")

        result = await _pipeline(state, _mock_translator(), lookup).run(payload)

        assert result is None
        assert not state.run_in_flight
        assert state.log_entries.snapshot()[-2:] == (
            "Translation completed.",
            "Error generating image: Unknown Stability artifact field: 'png'",
        )

    async def test_misconfigured_artifact_field(self, state, payload):
        state.provider = Provider.stability
        settings = Settings(_env_file=None, stability_artifact_field="png")

        def lookup(name):
            return StabilityImageProvider(settings=settings)

        await _pipeline(state, _mock_translator(), lookup).run(payload)

        assert state.image_url is None
        assert state.log_entries[-1].startswith("Error generating image: Unknown Stability artifact field")

    async def test_registered_provider_without_key(self, payload):
        """A third provider never receives the OpenAI key."""
        extra = _mock_provider("Extra", "https://x/1.png")
        state = SessionState(credentials=Credentials(openai_api_key="sk-openai"))
        state.provider = "extra"

        await _pipeline(state, _mock_translator(), lambda name: extra).run(payload)

        extra.generate.assert_awaited_once_with("a red fox", "")


# ---------------------------------------------------------------------------
# Run guard and log ordering
# ---------------------------------------------------------------------------


class TestRunGuard:
    """Overlapping runs are rejected explicitly."""

    async def test_overlapping_run_rejected(self, state, payload, lookup):
        """A second run started while the first awaits translation is ignored."""
        gate = asyncio.Event()
        translator = _mock_translator()

        async def slow_translate(p, key):
            await gate.wait()
            return "first"

        translator.translate.side_effect = slow_translate
        pipeline = _pipeline(state, translator, lookup)

        first = asyncio.create_task(pipeline.run(payload))
        await asyncio.sleep(0)
        assert state.run_in_flight is True

        second = await pipeline.run(payload)
        assert second is None
        assert "A run is already in progress; ignoring new audio." in state.log_entries.snapshot()

        gate.set()
        assert await first == "https://img/1.png"
        assert translator.translate.await_count == 1
        assert state.run_in_flight is False

    async def test_log_is_append_only_across_runs(self, state, payload, lookup, openai_provider):
        """Each run only ever extends the previous log."""
        pipeline = _pipeline(state, _mock_translator(), lookup)
        await pipeline.run(payload)
        before = state.log_entries.snapshot()

        openai_provider.generate.side_effect = ImageGenError("HTTP", status_code=400)
        await pipeline.run(payload)
        after = state.log_entries.snapshot()

        assert after[: len(before)] == before
        assert len(after) > len(before)

    async def test_provider_instances_are_reused(self, state, payload):
        """The lookup is consulted once per provider name, not once per run."""
        calls = []

        def lookup(name):
            calls.append(name)
            return _mock_provider("OpenAI", "https://img/1.png")

        pipeline = _pipeline(state, _mock_translator(), lookup)
        await pipeline.run(payload)
        await pipeline.run(payload)
        assert calls == ["openai"]
