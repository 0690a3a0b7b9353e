"""Per-browser-session objects kept in ``st.session_state``.

The ``SessionState``, its pipeline and its capture controller live as long
as the Streamlit session and are rebuilt from scratch in a new one.
"""

import asyncio

import streamlit as st

from voicecanvas.core.config import get_settings
from voicecanvas.core.models import AudioPayload, Provider
from voicecanvas.core.state import SessionState
from voicecanvas.services.audio.recorder import CaptureController, MicrophoneRecorder
from voicecanvas.services.orchestrator import VoicePipeline

_STATE_KEY = "vc_state"
_PIPELINE_KEY = "vc_pipeline"
_CAPTURE_KEY = "vc_capture"


def get_state() -> SessionState:
    """Return this browser session's state, creating it on first access."""
    if _STATE_KEY not in st.session_state:
        settings = get_settings()
        st.session_state[_STATE_KEY] = SessionState(provider=Provider(settings.default_provider))
    return st.session_state[_STATE_KEY]


def get_pipeline() -> VoicePipeline:
    if _PIPELINE_KEY not in st.session_state:
        st.session_state[_PIPELINE_KEY] = VoicePipeline(get_state())
    return st.session_state[_PIPELINE_KEY]


def _run_pipeline(payload: AudioPayload) -> None:
    """Drive one run to completion on this script thread."""
    asyncio.run(get_pipeline().run(payload))


def get_capture() -> CaptureController:
    """Return the capture controller, wired to hand payloads to the pipeline."""
    if _CAPTURE_KEY not in st.session_state:
        settings = get_settings()
        recorder = MicrophoneRecorder(
            sample_rate=settings.capture_sample_rate,
            channels=settings.capture_channels,
        )
        st.session_state[_CAPTURE_KEY] = CaptureController(
            get_state(),
            on_payload=_run_pipeline,
            recorder=recorder,
        )
    return st.session_state[_CAPTURE_KEY]
