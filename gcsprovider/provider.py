"""Google Cloud Storage upload provider.

Upload flow for one file:
1. Ensure the bucket exists
2. Remove an object previously stored under the same name
3. Images: upload the LG/MD/SM/Thumb variants concurrently, then the
   full-size rendition bounded to 1024x1024
4. Other files (or undecodable images): upload the buffer as-is

Variant failures are logged and absorbed; only a failure of the full-size
upload is raised to the host. Storage SDK and Pillow calls are blocking and
run in worker threads.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from google.api_core import exceptions as gcs_exceptions
from google.cloud import storage
from PIL import Image

from . import imaging, paths
from .bucket import check_bucket
from .config import AUTH_FIELDS, AuthField, GcsSettings, ProviderConfig, check_config
from .credentials import check_service_account, create_storage_client
from .errors import DeleteFailedError, ObjectNotFoundError, UploadFailedError
from .models import UploadFile
from .plugin import Uploader, UploadProvider

logger = logging.getLogger(__name__)

PUBLIC_ACL = "publicRead"

# Errors raised by the SDK: API errors, and transport errors (requests
# exceptions derive from OSError)
_SDK_ERRORS = (gcs_exceptions.GoogleAPIError, OSError)


class GcsUploader(Uploader):
    """
    Uploader bound to one bucket.

    Created by GoogleCloudStorageProvider.init(); not meant to be built
    directly by hosts.
    """

    def __init__(
        self,
        config: ProviderConfig,
        client: storage.Client,
        log: logging.Logger | None = None,
    ):
        self._config = config
        self._client = client
        self._log = log or logger

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @property
    def base_url(self) -> str:
        """Public base URL of the bucket."""
        return self._config.public_base_url

    async def upload(self, file: UploadFile) -> None:
        await asyncio.to_thread(
            check_bucket,
            self._client,
            self._config.bucket_name,
            self._config.bucket_location,
            self._log,
        )
        await self._remove_existing(file)

        image = None
        if imaging.is_image_extension(file.ext):
            image = await asyncio.to_thread(imaging.read_image, file.buffer)

        object_name = paths.object_name(file)

        if image is None:
            await self._store(file, object_name, file.buffer)
        else:
            fmt = imaging.output_format(file.ext)
            await asyncio.gather(
                *(
                    self._upload_variant(file, image, variant, fmt)
                    for variant in imaging.VARIANTS
                )
            )
            try:
                data = await asyncio.to_thread(
                    imaging.render, image, imaging.ORIGINAL, fmt
                )
            except (OSError, ValueError) as e:
                raise UploadFailedError(f"{object_name}: {e}") from e
            await self._store(file, object_name, data)

        file.url = paths.public_url(self.base_url, object_name)
        self._log.debug(
            f"File successfully uploaded to {file.url}",
            extra={"bucket": self._config.bucket_name, "object": object_name},
        )

    async def delete(self, file: UploadFile) -> None:
        if not file.url:
            self._log.warning(
                "File has no URL, nothing to delete.", extra={"hash": file.hash}
            )
            return

        # Variants are removed on a best-effort basis
        for variant in imaging.VARIANTS:
            url = getattr(file, variant.field)
            if not url:
                continue
            try:
                await self._delete_object(paths.object_name_from_url(self.base_url, url))
            except ObjectNotFoundError:
                self._log.debug(f"Variant {url} was already removed")
            except DeleteFailedError as e:
                self._log.warning(f"Unable to delete variant {url}: {e}")

        try:
            await self._delete_object(
                paths.object_name_from_url(self.base_url, file.url)
            )
        except ObjectNotFoundError:
            self._log.warning(
                "Remote file was not found, you may have to delete manually.",
                extra={"url": file.url},
            )

    async def _remove_existing(self, file: UploadFile) -> None:
        """Delete the object a previous upload stored under the same name."""
        object_name = paths.object_name(file)
        blob = self._client.bucket(self._config.bucket_name).blob(object_name)
        try:
            exists = await asyncio.to_thread(blob.exists)
        except _SDK_ERRORS as e:
            raise UploadFailedError(f"{object_name}: {e}") from e

        if not exists:
            return

        self._log.info(
            "File already exist, try to remove it.", extra={"object": object_name}
        )
        target = (
            paths.object_name_from_url(self.base_url, file.url)
            if file.url
            else object_name
        )
        try:
            await self._delete_object(target)
        except ObjectNotFoundError:
            self._log.warning(
                "Remote file was not found, you may have to delete manually.",
                extra={"object": target},
            )
        except DeleteFailedError as e:
            # The upload overwrites the object anyway
            self._log.warning(f"Unable to remove existing file: {e}")

    async def _upload_variant(
        self,
        file: UploadFile,
        image: Image.Image,
        variant: imaging.Variant,
        fmt: str,
    ) -> bool:
        """Render and upload one variant. Returns False if it failed."""
        object_name = paths.object_name(file, variant.suffix)
        try:
            data = await asyncio.to_thread(imaging.render, image.copy(), variant, fmt)
            await self._store(file, object_name, data)
        except Exception as e:
            self._log.warning(
                f"Variant {variant.suffix} upload failed: {e}",
                extra={"object": object_name},
            )
            return False

        url = paths.public_url(self.base_url, object_name)
        setattr(file, variant.field, url)
        self._log.debug(f"File successfully uploaded to {url}")
        return True

    async def _store(self, file: UploadFile, object_name: str, data: bytes) -> None:
        """Save data as a public object with the file's content type."""
        try:
            await asyncio.to_thread(
                self._save_blob, object_name, data, file.mime, file.name
            )
        except _SDK_ERRORS as e:
            raise UploadFailedError(f"{object_name}: {e}") from e

    def _save_blob(self, object_name: str, data: bytes, mime: str, name: str) -> None:
        blob = self._client.bucket(self._config.bucket_name).blob(object_name)
        blob.content_disposition = f'inline; filename="{name}"'
        blob.upload_from_string(data, content_type=mime, predefined_acl=PUBLIC_ACL)

    async def _delete_object(self, object_name: str) -> None:
        """
        Delete one object.

        Raises:
            ObjectNotFoundError: Object doesn't exist (404)
            DeleteFailedError: Any other failure
        """
        blob = self._client.bucket(self._config.bucket_name).blob(object_name)
        try:
            await asyncio.to_thread(blob.delete)
        except gcs_exceptions.NotFound as e:
            raise ObjectNotFoundError(object_name) from e
        except _SDK_ERRORS as e:
            raise DeleteFailedError(f"{object_name}: {e}") from e

        self._log.debug(f"File {object_name} successfully deleted")


class GoogleCloudStorageProvider(UploadProvider):
    """
    Google Cloud Storage upload provider.

    Example:
        provider = GoogleCloudStorageProvider()
        uploader = provider.init(
            {
                "serviceAccount": service_account_json,
                "bucketName": "my-media",
                "bucketLocation": "eu",
            }
        )
        await uploader.upload(file)
        print(file.url)
    """

    @property
    def provider(self) -> str:
        return "google-cloud-storage"

    @property
    def name(self) -> str:
        return "Google Cloud Storage"

    @property
    def auth(self) -> dict[str, AuthField]:
        return AUTH_FIELDS

    def init(
        self,
        config: ProviderConfig | Mapping[str, Any],
        *,
        overrides: GcsSettings | Mapping[str, Any] | None = None,
        client: storage.Client | None = None,
        log: logging.Logger | None = None,
    ) -> GcsUploader:
        """
        Validate configuration, connect and ensure the bucket exists.

        Args:
            config: Configuration record stored by the host
            overrides: Host-level overrides (default: GCS_ environment variables)
            client: Pre-built storage client (default: built from the service account)
            log: Host logger (default: this module's logger)

        Returns:
            GcsUploader bound to the configured bucket

        Raises:
            ConfigError: Configuration or service account is invalid
            BucketError: Bucket is missing and could not be created
        """
        log = log or logger
        normalized = check_config(config, overrides)
        account = check_service_account(normalized)
        if client is None:
            client = create_storage_client(account)

        check_bucket(client, normalized.bucket_name, normalized.bucket_location, log)

        log.info(
            "Initialized Google Cloud Storage provider",
            extra={
                "project": account.project_id,
                "bucket": normalized.bucket_name,
                "location": normalized.bucket_location.value,
            },
        )
        return GcsUploader(normalized, client, log)
