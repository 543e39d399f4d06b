"""Google Cloud Storage upload provider.

Uploads, resizes and deletes media assets in a Google Cloud Storage bucket
on behalf of a content-management host.

Example:
    from gcsprovider import GoogleCloudStorageProvider, UploadFile

    provider = GoogleCloudStorageProvider()
    uploader = provider.init(
        {
            "serviceAccount": open("service-account.json").read(),
            "bucketName": "my-media",
            "bucketLocation": "eu",
            "baseUrl": "https://storage.googleapis.com/{bucket-name}",
        }
    )

    file = UploadFile(
        name="cat.png",
        hash="cat_1a2b3c",
        ext=".png",
        mime="image/png",
        buffer=open("cat.png", "rb").read(),
    )
    await uploader.upload(file)

    # file.url, file.url_lg, file.url_md, file.url_sm, file.url_thumb
    await uploader.delete(file)
"""

from importlib.metadata import PackageNotFoundError, version

from .bucket import check_bucket
from .config import (
    AUTH_FIELDS,
    AuthField,
    GcsSettings,
    ProviderConfig,
    check_config,
    load_host_config,
)
from .credentials import ServiceAccount, check_service_account, create_storage_client
from .errors import (
    BucketError,
    ConfigError,
    DeleteFailedError,
    ObjectNotFoundError,
    ProviderError,
    ProviderNotFoundError,
    StorageError,
    UploadFailedError,
)
from .models import RelatedRef, UploadFile
from .plugin import Uploader, UploadProvider
from .provider import GcsUploader, GoogleCloudStorageProvider
from .registry import ProviderRegistry, default_registry
from .types import BaseUrlTemplate, BucketLocation

try:
    __version__ = version("gcs-upload-provider")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "AUTH_FIELDS",
    "AuthField",
    "BaseUrlTemplate",
    "BucketError",
    "BucketLocation",
    "ConfigError",
    "DeleteFailedError",
    "GcsSettings",
    "GcsUploader",
    "GoogleCloudStorageProvider",
    "ObjectNotFoundError",
    "ProviderConfig",
    "ProviderError",
    "ProviderNotFoundError",
    "ProviderRegistry",
    "RelatedRef",
    "ServiceAccount",
    "StorageError",
    "UploadFailedError",
    "UploadFile",
    "UploadProvider",
    "Uploader",
    # Version
    "__version__",
    "check_bucket",
    "check_config",
    "check_service_account",
    "create_storage_client",
    "default_registry",
    "load_host_config",
]
