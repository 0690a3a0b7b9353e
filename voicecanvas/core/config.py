"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.

API keys are deliberately absent: they are typed into the UI for the
current session only and never read from the environment.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """VoiceCanvas application settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        translation_url: Whisper speech-translation endpoint.
        default_provider: Image provider preselected in the UI ("openai" or "stability").
        stability_artifact_field: Which Stability response shape to parse ("url" or "base64").
        request_timeout_s: Per-request HTTP timeout; None waits forever.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Translation (OpenAI Whisper) ---
    translation_url: str = "https://api.openai.com/v1/audio/translations"
    translation_model: str = "whisper-1"

    # --- Image generation: OpenAI ---
    openai_image_url: str = "https://api.openai.com/v1/images/generations"
    openai_image_model: str = "dall-e-3"
    openai_image_size: str = "1024x1024"

    # --- Image generation: Stability AI ---
    stability_image_url: str = (
        "https://api.stability.ai/v1/generation/stable-diffusion-xl-1024-v1-0/text-to-image"
    )
    stability_steps: int = 40
    stability_width: int = 1024
    stability_height: int = 1024
    stability_seed: int = 0
    stability_cfg_scale: float = 5
    stability_samples: int = 1
    # "url" = artifacts[0].url, "base64" = artifacts[0].base64 turned into a data URI
    stability_artifact_field: str = "url"

    # --- Pipeline ---
    default_provider: str = "openai"
    request_timeout_s: float | None = 120.0

    # --- Capture ---
    capture_source: str = "microphone"  # "microphone" = sounddevice, "browser" = st.audio_input
    capture_sample_rate: int = 16000
    capture_channels: int = 1

    # --- Application ---
    log_level: str = "INFO"  # Python logging level


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
