"""Shared pytest fixtures for the VoiceCanvas test suite.

Provides settings isolated from any local .env file, a fresh session
state, a sample audio payload and a helper for faking HTTP endpoints
with ``httpx.MockTransport``.
"""

import json

import httpx
import numpy as np
import pytest

from voicecanvas.core.config import Settings
from voicecanvas.core.models import AudioPayload, Credentials
from voicecanvas.core.state import SessionState

# ---------------------------------------------------------------------------
# Settings / state
# ---------------------------------------------------------------------------


@pytest.fixture
def settings():
    """Default settings, ignoring any .env file in the working directory."""
    return Settings(_env_file=None)


@pytest.fixture
def state():
    """A fresh session state with both API keys filled in."""
    return SessionState(
        credentials=Credentials(openai_api_key="sk-openai", stability_api_key="sk-stability"),
    )


# ---------------------------------------------------------------------------
# Audio fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def payload():
    """A small opaque audio payload as the browser would produce it."""
    return AudioPayload(data=b"\x1aE\xdf\xa3fake-webm-bytes")


@pytest.fixture
def sine_chunks():
    """Ten 100 ms int16 blocks of a 440 Hz tone (16 kHz, mono)."""
    sample_rate = 16000
    t = np.arange(sample_rate) / sample_rate
    tone = (16000 * np.sin(2 * np.pi * 440.0 * t)).astype(np.int16).reshape(-1, 1)
    return [tone[i : i + 1600] for i in range(0, sample_rate, 1600)]


# ---------------------------------------------------------------------------
# HTTP fakes
# ---------------------------------------------------------------------------


class FakeEndpoint:
    """Records every request and answers with a canned response.

    Args:
        status: HTTP status to return.
        body: JSON body to return (None sends an empty body).
        error: Exception class from httpx to raise instead of responding.
    """

    def __init__(self, status: int = 200, body=None, error: type[Exception] | None = None) -> None:
        self.status = status
        self.body = body
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error("simulated transport failure", request=request)
        if self.body is None:
            return httpx.Response(self.status)
        return httpx.Response(self.status, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def fake_endpoint():
    """Factory fixture: ``fake_endpoint(status, body, error)`` -> FakeEndpoint."""
    return FakeEndpoint
