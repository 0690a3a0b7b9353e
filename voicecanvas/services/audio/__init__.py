"""
Audio module - Microphone capture and payload encoding.
"""

from .processor import AudioProcessor
from .recorder import CaptureController, MicrophoneRecorder

__all__ = ["AudioProcessor", "CaptureController", "MicrophoneRecorder"]
