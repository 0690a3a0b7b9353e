"""
VoiceCanvas Streamlit UI — main entry point.

Run with: ``streamlit run voicecanvas/ui/app.py``
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from voicecanvas.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (voicecanvas/ui/),
# which removes the project root needed for absolute imports.
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import logging  # noqa: E402

import streamlit as st  # noqa: E402

from voicecanvas.core.config import get_settings  # noqa: E402
from voicecanvas.core.models import Credentials, Provider  # noqa: E402
from voicecanvas.ui.components.recorder import render_recorder  # noqa: E402
from voicecanvas.ui.components.results import (  # noqa: E402
    render_image,
    render_playback,
    render_run_log,
    render_translation,
)
from voicecanvas.ui.session import get_capture, get_state  # noqa: E402

_settings = get_settings()
logging.basicConfig(
    level=_settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="VoiceCanvas",
    page_icon="\U0001f3a8",
    layout="centered",
)

state = get_state()

# ---------------------------------------------------------------------------
# Sidebar: credentials and provider selection
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("\U0001f3a8 VoiceCanvas")
    st.caption("Speak, translate, illustrate")
    st.divider()

    openai_key = st.text_input(
        "OpenAI API Key",
        value=state.credentials.openai_api_key,
        type="password",
        help="Used for speech translation and for OpenAI image generation.",
    )
    stability_key = st.text_input(
        "Stability AI API Key",
        value=state.credentials.stability_api_key,
        type="password",
        help="Only needed when StabilityAI is the selected image provider.",
    )
    state.credentials = Credentials(openai_api_key=openai_key, stability_api_key=stability_key)

    providers = list(Provider)
    state.provider = st.radio(
        "Image provider",
        providers,
        index=providers.index(state.provider),
        format_func=lambda p: p.label,
        disabled=state.is_recording or state.run_in_flight,
    )

# ---------------------------------------------------------------------------
# Main view
# ---------------------------------------------------------------------------
st.header("Voice to Image")
render_recorder(state, get_capture())
if state.is_recording:
    st.info("\U0001f534 Recording... press Stop Recording when you are done.")

render_playback(state)
render_translation(state)
render_image(state)
st.divider()
render_run_log(state)
