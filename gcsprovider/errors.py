"""Provider error types."""


class ProviderError(Exception):
    """Base class for upload provider errors."""


class ConfigError(ProviderError):
    """Configuration error."""


class BucketError(ProviderError):
    """Bucket could not be checked or created."""


class ProviderNotFoundError(ProviderError):
    """Provider implementation not found in registry."""


class StorageError(ProviderError):
    """Base exception for object storage operations."""


class ObjectNotFoundError(StorageError):
    """Object not found in the bucket."""

    def __init__(self, object_name: str):
        super().__init__(f"Object not found: {object_name}")
        self.object_name = object_name


class UploadFailedError(StorageError):
    """Object upload failed."""

    def __init__(self, message: str):
        super().__init__(f"Upload failed: {message}")


class DeleteFailedError(StorageError):
    """Object deletion failed."""

    def __init__(self, message: str):
        super().__init__(f"Delete failed: {message}")
