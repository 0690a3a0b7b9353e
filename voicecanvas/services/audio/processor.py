"""Audio processing utilities for captured microphone chunks.

Joins int16 sample blocks in arrival order and encodes them as an
in-memory WAV file suitable for upload.
"""

import io

import numpy as np
import soundfile as sf

from voicecanvas.core.models import AudioPayload


class AudioProcessor:
    """Turns raw capture chunks into an uploadable ``AudioPayload``.

    Args:
        sample_rate: Audio sample rate in Hz (default: 16 kHz).
        channels: Number of audio channels (1 = mono).
    """

    def __init__(self, sample_rate: int = 16000, channels: int = 1) -> None:
        self.sample_rate = sample_rate
        self.channels = channels

    def join_chunks(self, chunks: list[np.ndarray]) -> np.ndarray:
        """Concatenate int16 blocks into a single ``(frames, channels)`` array.

        An empty list yields a zero-length array with the right shape.
        """
        if not chunks:
            return np.zeros((0, self.channels), dtype=np.int16)
        blocks = [np.asarray(c, dtype=np.int16).reshape(-1, self.channels) for c in chunks]
        return np.concatenate(blocks, axis=0)

    def encode_wav(self, samples: np.ndarray) -> bytes:
        """Encode int16 samples as 16-bit PCM WAV bytes."""
        buf = io.BytesIO()
        sf.write(buf, samples, self.sample_rate, format="WAV", subtype="PCM_16")
        return buf.getvalue()

    def build_payload(self, chunks: list[np.ndarray]) -> AudioPayload:
        """Assemble all chunks into one immutable WAV payload."""
        wav_bytes = self.encode_wav(self.join_chunks(chunks))
        return AudioPayload(data=wav_bytes, filename="audio.wav", content_type="audio/wav")

    def duration(self, chunks: list[np.ndarray]) -> float:
        """Total captured duration in seconds."""
        frames = sum(len(np.asarray(c).reshape(-1, self.channels)) for c in chunks)
        return frames / self.sample_rate
