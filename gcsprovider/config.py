"""Provider configuration.

The host hands the provider a configuration record built from the fields
declared in AUTH_FIELDS. Host-level overrides (environment variables or the
``gcs`` section of a host YAML file) take precedence over that record.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError
from .types import (
    BUCKET_PLACEHOLDER,
    BaseUrlTemplate,
    BucketLocation,
    BucketName,
)


class AuthField(BaseModel):
    """A configuration field declared to the host admin UI."""

    label: str
    type: str
    values: list[str] | None = None


AUTH_FIELDS: dict[str, AuthField] = {
    "serviceAccount": AuthField(label="Service Account JSON", type="textarea"),
    "bucketName": AuthField(label="Multi-Regional Bucket Name", type="text"),
    "bucketLocation": AuthField(
        label="Multi-Regional location",
        type="enum",
        values=[location.value for location in BucketLocation],
    ),
    "baseUrl": AuthField(
        label=(
            "Use bucket name as base URL "
            "(https://cloud.google.com/storage/docs/domain-name-verification)"
        ),
        type="enum",
        values=[template.value for template in BaseUrlTemplate],
    ),
}

# Host (camelCase) key -> config field name
_HOST_KEYS = {
    "serviceAccount": "service_account",
    "bucketName": "bucket_name",
    "bucketLocation": "bucket_location",
    "baseUrl": "base_url",
}

_OVERRIDE_FIELDS = tuple(_HOST_KEYS.values())


class ProviderConfig(BaseModel):
    """
    Provider configuration record.

    Accepts both the host's camelCase keys (``bucketName``) and snake_case
    field names. Required values are checked by check_service_account(), not
    here, so that a half-filled admin form can still be normalized.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    service_account: str | None = Field(default=None, alias="serviceAccount")
    bucket_name: BucketName | None = Field(default=None, alias="bucketName")
    bucket_location: BucketLocation = Field(
        default=BucketLocation.US, alias="bucketLocation"
    )
    base_url: BaseUrlTemplate = Field(
        default=BaseUrlTemplate.STORAGE_API, alias="baseUrl"
    )

    @field_validator("service_account", "bucket_name", mode="before")
    @classmethod
    def _blank_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def public_base_url(self) -> str:
        """Base URL with the bucket name substituted."""
        return self.base_url.value.replace(BUCKET_PLACEHOLDER, self.bucket_name or "")


class GcsSettings(BaseSettings):
    """
    Host-level configuration overrides.

    Uses Pydantic BaseSettings for automatic environment variable loading.
    Environment variables are prefixed with GCS_.

    Optional environment variables:
        GCS_SERVICE_ACCOUNT: Service account JSON text
        GCS_BUCKET_NAME: Bucket name
        GCS_BUCKET_LOCATION: Bucket location (asia, eu, us)
        GCS_BASE_URL: Base URL template
    """

    model_config = SettingsConfigDict(
        env_prefix="GCS_",
        extra="ignore",
    )

    service_account: str | None = None
    bucket_name: str | None = None
    bucket_location: str | None = None
    base_url: str | None = None


def _trim(value: Any) -> str | None:
    return value.strip() if isinstance(value, str) else None


def load_host_config(path: str | Path) -> GcsSettings:
    """Load overrides from the ``gcs`` section of a host YAML file.

    Keys may use the host's camelCase names or snake_case. Values set in the
    file win over GCS_ environment variables.

    Raises:
        ConfigError: If the file cannot be read or is not a mapping
    """
    try:
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Unable to read host config {path}: {e}") from e

    if not isinstance(document, Mapping):
        raise ConfigError(f"Host config {path} must be a mapping")

    section = document.get("gcs") or {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"'gcs' section of {path} must be a mapping")

    values = {_HOST_KEYS.get(key, key): value for key, value in section.items()}
    return GcsSettings(
        **{key: value for key, value in values.items() if key in _OVERRIDE_FIELDS}
    )


def check_config(
    config: ProviderConfig | Mapping[str, Any],
    overrides: GcsSettings | Mapping[str, Any] | None = None,
) -> ProviderConfig:
    """
    Apply host-level overrides to a provider configuration.

    Override strings are trimmed; missing, empty or non-string overrides
    leave the configured value untouched.

    Args:
        config: Configuration record from the host (model or mapping)
        overrides: Host overrides. Defaults to GCS_ environment variables.

    Returns:
        Normalized ProviderConfig

    Raises:
        ConfigError: If the merged configuration is invalid
    """
    if overrides is None:
        overrides = GcsSettings()
    if isinstance(overrides, GcsSettings):
        overrides = overrides.model_dump()
    else:
        overrides = {_HOST_KEYS.get(key, key): value for key, value in overrides.items()}

    if isinstance(config, ProviderConfig):
        values = config.model_dump()
    else:
        values = {_HOST_KEYS.get(key, key): value for key, value in config.items()}

    for field in _OVERRIDE_FIELDS:
        value = _trim(overrides.get(field))
        if value:
            values[field] = value

    try:
        return ProviderConfig.model_validate(values)
    except ValueError as e:
        raise ConfigError(f"Invalid provider configuration: {e}") from e
