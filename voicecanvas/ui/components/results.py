"""Read-only views of the latest run: playback, translation, image and log."""

import streamlit as st

from voicecanvas.core.state import SessionState


def render_playback(state: SessionState) -> None:
    payload = state.last_payload
    if payload is None:
        return
    st.audio(payload.data, format=payload.content_type)


def render_translation(state: SessionState) -> None:
    if state.translation:
        st.markdown(f"**Translation:** {state.translation}")


def render_image(state: SessionState) -> None:
    if state.image_url:
        st.image(state.image_url, caption="Generated Image", width=500)


def render_run_log(state: SessionState) -> None:
    """Render the run log in insertion order."""
    st.subheader("Logs")
    entries = state.log_entries.snapshot()
    if not entries:
        st.caption("Nothing logged yet.")
        return
    st.code("\n".join(entries), language=None)
