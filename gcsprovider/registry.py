"""Upload provider registry.

Models the host's plugin-loading convention: providers are looked up by
their key and initialized with the configuration the host stores for them.
"""

from typing import Any

from .errors import ProviderNotFoundError
from .plugin import Uploader, UploadProvider


class ProviderRegistry:
    """Upload provider registry."""

    def __init__(self) -> None:
        self._providers: dict[str, UploadProvider] = {}

    def register(self, provider: UploadProvider) -> None:
        """
        Register a provider implementation.

        A provider registered under an existing key replaces the previous one.

        Args:
            provider: The provider implementation
        """
        self._providers[provider.provider] = provider

    def get(self, key: str) -> UploadProvider | None:
        """Get provider by key."""
        return self._providers.get(key)

    def provider_names(self) -> list[str]:
        """Get all registered provider keys."""
        return list(self._providers.keys())

    def init(self, key: str, config: Any, **kwargs: Any) -> Uploader:
        """
        Initialize a registered provider.

        Args:
            key: Provider key
            config: Provider configuration
            **kwargs: Passed through to the provider's init()

        Returns:
            Initialized Uploader

        Raises:
            ProviderNotFoundError: Provider not registered
            ConfigError: Configuration is invalid
        """
        provider = self._providers.get(key)
        if not provider:
            raise ProviderNotFoundError(f"Upload provider not found: {key}")
        return provider.init(config, **kwargs)


def default_registry() -> ProviderRegistry:
    """Create a registry with the Google Cloud Storage provider registered."""
    from .provider import GoogleCloudStorageProvider

    registry = ProviderRegistry()
    registry.register(GoogleCloudStorageProvider())
    return registry
