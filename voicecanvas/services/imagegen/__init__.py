"""
Image generation module - Provider abstraction layer.

Providers are looked up by name in a registry so new backends can be added
with ``register_image_provider`` without touching the pipeline.
"""

from collections.abc import Callable

from voicecanvas.core.exceptions import UnknownProviderError

from .base import BaseImageProvider

__all__ = [
    "BaseImageProvider",
    "create_image_provider",
    "register_image_provider",
    "registered_providers",
]

ProviderFactory = Callable[..., BaseImageProvider]


def _dalle(**kwargs) -> BaseImageProvider:
    from .dalle import DalleImageProvider

    return DalleImageProvider(**kwargs)


def _stability(**kwargs) -> BaseImageProvider:
    from .stability import StabilityImageProvider

    return StabilityImageProvider(**kwargs)


_REGISTRY: dict[str, ProviderFactory] = {
    "openai": _dalle,
    "stability": _stability,
}


def register_image_provider(name: str, factory: ProviderFactory) -> None:
    """Register (or replace) the factory used for provider ``name``."""
    _REGISTRY[str(name)] = factory


def registered_providers() -> list[str]:
    return list(_REGISTRY)


def create_image_provider(provider: str, **kwargs) -> BaseImageProvider:
    """
    Factory function to create an image provider instance by name.

    Args:
        provider: Provider name ("openai", "stability", or any registered name)
        **kwargs: Provider-specific configuration

    Returns:
        BaseImageProvider implementation instance

    Raises:
        UnknownProviderError: If no factory is registered under ``provider``
    """
    try:
        factory = _REGISTRY[str(provider)]
    except KeyError:
        raise UnknownProviderError(str(provider)) from None
    return factory(**kwargs)
