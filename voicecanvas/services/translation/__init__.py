"""
Translation module - Speech-to-English abstraction layer.

Factory function for creating translator instances based on provider configuration.
"""

from .base import BaseTranslator

__all__ = ["BaseTranslator", "create_translator"]


def create_translator(provider: str = "whisper", **kwargs) -> BaseTranslator:
    """
    Factory function to create a translator instance based on provider.

    Args:
        provider: Translation provider name ("whisper", "openai")
        **kwargs: Provider-specific configuration

    Returns:
        BaseTranslator implementation instance

    Raises:
        ValueError: If provider is unknown
    """
    if provider == "whisper" or provider == "openai":
        from .whisper import WhisperTranslator
        return WhisperTranslator(**kwargs)
    else:
        raise ValueError(f"Unknown translation provider: {provider}")
