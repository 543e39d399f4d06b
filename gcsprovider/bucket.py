"""Bucket existence check.

Idempotent: looks the bucket up first and creates it only when missing.
"""

import logging

from google.api_core import exceptions as gcs_exceptions
from google.cloud import storage

from .errors import BucketError
from .types import BucketLocation

logger = logging.getLogger(__name__)

STORAGE_CLASS = "MULTI_REGIONAL"

# API errors, and transport errors (requests exceptions derive from OSError)
_SDK_ERRORS = (gcs_exceptions.GoogleAPIError, OSError)


def check_bucket(
    client: storage.Client,
    bucket_name: str,
    bucket_location: BucketLocation | str,
    log: logging.Logger | None = None,
) -> None:
    """
    Check the bucket exists, or create it.

    Args:
        client: Cloud Storage client
        bucket_name: Bucket to check
        bucket_location: Multi-regional location used when creating
        log: Host logger (defaults to this module's logger)

    Raises:
        BucketError: If the lookup or the creation fails
    """
    log = log or logger
    location = BucketLocation(bucket_location).value
    bucket = client.bucket(bucket_name)

    try:
        if bucket.exists():
            return
    except _SDK_ERRORS as e:
        raise BucketError(f'Unable to check the Bucket "{bucket_name}": {e}') from e

    bucket.storage_class = STORAGE_CLASS
    try:
        client.create_bucket(bucket, location=location)
    except gcs_exceptions.Conflict:
        # Created by a concurrent caller between exists() and create_bucket()
        log.debug(f"Bucket {bucket_name} already created.")
        return
    except _SDK_ERRORS as e:
        raise BucketError(
            f'An error occurs when we try to create the Bucket "{bucket_name}". '
            "Please try again on Google Cloud Platform directly."
        ) from e

    log.debug(
        f"Bucket {bucket_name} successfully created.",
        extra={"bucket": bucket_name, "location": location},
    )
