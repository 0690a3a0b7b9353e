"""
Recorder component — start/stop toggle or browser capture.

States: idle -> active -> idle (run executes while the spinner is shown)
"""

import hashlib

import streamlit as st

from voicecanvas.core.config import get_settings
from voicecanvas.core.state import SessionState
from voicecanvas.services.audio.recorder import CaptureController

_LAST_UPLOAD_KEY = "vc_last_upload_digest"


def render_recorder(state: SessionState, capture: CaptureController) -> None:
    """Render the capture control selected by ``Settings.capture_source``."""
    if get_settings().capture_source == "browser":
        _render_browser_capture(state, capture)
    else:
        _render_toggle(state, capture)


def _render_toggle(state: SessionState, capture: CaptureController) -> None:
    """One button that flips between Start Recording and Stop Recording."""
    label = "Stop Recording" if state.is_recording else "Start Recording"
    clicked = st.button(
        label,
        type="primary",
        disabled=state.run_in_flight,
        use_container_width=True,
    )
    if not clicked:
        return

    if state.is_recording:
        with st.spinner("Translating audio and generating image..."):
            capture.stop()
    else:
        capture.start()
    st.rerun()


def _render_browser_capture(state: SessionState, capture: CaptureController) -> None:
    """Record in the browser with ``st.audio_input`` and submit each new clip once."""
    audio = st.audio_input("Record audio", disabled=state.run_in_flight)
    if audio is None:
        return

    data = audio.getvalue()
    digest = hashlib.sha256(data).hexdigest()
    if st.session_state.get(_LAST_UPLOAD_KEY) == digest:
        return
    st.session_state[_LAST_UPLOAD_KEY] = digest

    with st.spinner("Translating audio and generating image..."):
        capture.accept_upload(
            data,
            filename=audio.name or "audio.wav",
            content_type=audio.type or "audio/wav",
        )
    st.rerun()
