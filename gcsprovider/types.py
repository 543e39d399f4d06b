"""Common annotated types for field validation.

These types provide consistent validation patterns across the provider.
"""

from enum import Enum
from typing import Annotated

from pydantic import Field

# Pattern for bucket names (lowercase, digits, dashes, underscores, dots;
# must start and end with a letter or digit)
BUCKET_NAME_PATTERN = r"^[a-z0-9][a-z0-9._-]*[a-z0-9]$"

# Pattern for file extensions as sent by the host (".png", ".JPG")
EXTENSION_PATTERN = r"^(\.[A-Za-z0-9]+)?$"

# Placeholder substituted with the bucket name in base URL templates
BUCKET_PLACEHOLDER = "{bucket-name}"


class BucketLocation(str, Enum):
    """Multi-regional bucket location."""

    ASIA = "asia"
    EU = "eu"
    US = "us"


class BaseUrlTemplate(str, Enum):
    """Public base URL template. {bucket-name} is replaced at runtime."""

    STORAGE_API = "https://storage.googleapis.com/{bucket-name}"
    BUCKET_HTTPS = "https://{bucket-name}"
    BUCKET_HTTP = "http://{bucket-name}"


# Bucket name - validated once the host configuration has been normalized
BucketName = Annotated[str, Field(min_length=3, max_length=222, pattern=BUCKET_NAME_PATTERN)]

# File hash - the host-generated unique stem of an object name
FileHash = Annotated[str, Field(min_length=1)]

# File extension including the leading dot; may be empty
FileExtension = Annotated[str, Field(pattern=EXTENSION_PATTERN)]
