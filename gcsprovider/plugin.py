"""Upload provider interface.

A provider declares its configuration fields to the host and, once
initialized with a configuration, returns an Uploader exposing the two
lifecycle operations the host calls.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .config import AuthField
    from .models import UploadFile


class Uploader(ABC):
    """Initialized provider, bound to one configuration."""

    @abstractmethod
    async def upload(self, file: UploadFile) -> None:
        """
        Upload a file and set its public URL(s) on the record.

        Args:
            file: Upload record; mutated in place with the resulting URLs

        Raises:
            UploadFailedError: The file could not be stored
        """

    @abstractmethod
    async def delete(self, file: UploadFile) -> None:
        """
        Delete the object addressed by ``file.url``.

        Raises:
            DeleteFailedError: The object could not be deleted
        """


class UploadProvider(ABC):
    """
    Upload provider plugin.

    Implementations are registered with a ProviderRegistry under their
    ``provider`` key.
    """

    @property
    @abstractmethod
    def provider(self) -> str:
        """Provider key (e.g., 'google-cloud-storage')."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable provider name."""

    @property
    @abstractmethod
    def auth(self) -> dict[str, AuthField]:
        """Configuration fields shown by the host admin UI."""

    @abstractmethod
    def init(self, config: Any, **kwargs: Any) -> Uploader:
        """
        Validate configuration and return an initialized Uploader.

        Raises:
            ConfigError: Configuration is invalid
        """
