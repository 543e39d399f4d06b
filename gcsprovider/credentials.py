"""Service account validation and storage client creation."""

import json

from google.cloud import storage
from google.oauth2 import service_account
from pydantic import BaseModel, ConfigDict

from .config import ProviderConfig
from .errors import ConfigError

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"

# Fields that must be present in the service account JSON, in check order
REQUIRED_FIELDS = ("project_id", "client_email", "private_key")


class ServiceAccount(BaseModel):
    """Parsed service account JSON.

    Extra keys of the downloaded key file (type, private_key_id, client_id...)
    are kept so they reach google-auth unchanged.
    """

    model_config = ConfigDict(extra="allow")

    project_id: str
    client_email: str
    private_key: str
    token_uri: str = DEFAULT_TOKEN_URI

    def to_credentials(self) -> service_account.Credentials:
        """Build google-auth credentials for this account.

        Raises:
            ConfigError: If the private key cannot be loaded
        """
        try:
            return service_account.Credentials.from_service_account_info(
                self.model_dump()
            )
        except ValueError as e:
            raise ConfigError(
                f'Invalid "private_key" in "Service Account JSON": {e}'
            ) from e


def check_service_account(config: ProviderConfig) -> ServiceAccount:
    """
    Check validity of the service account configuration.

    Args:
        config: Normalized provider configuration

    Returns:
        Parsed ServiceAccount

    Raises:
        ConfigError: If the service account or bucket name is missing, the
            JSON cannot be parsed, or a required key is absent
    """
    if not config.service_account:
        raise ConfigError('"Service Account JSON" is required!')
    if not config.bucket_name:
        raise ConfigError('"Multi-Regional Bucket name" is required!')

    try:
        data = json.loads(config.service_account)
    except ValueError as e:
        raise ConfigError(
            'Error parsing data "Service Account JSON", '
            "please be sure to copy/paste the full JSON file."
        ) from e

    if not isinstance(data, dict):
        raise ConfigError(
            'Error parsing data "Service Account JSON", '
            "please be sure to copy/paste the full JSON file."
        )

    # Name the missing field rather than the generic copy/paste message
    for field in REQUIRED_FIELDS:
        if not data.get(field):
            raise ConfigError(
                f'Error parsing data "Service Account JSON". '
                f'Missing "{field}" field in JSON file.'
            )

    return ServiceAccount.model_validate(data)


def create_storage_client(account: ServiceAccount) -> storage.Client:
    """Create a Cloud Storage client authenticated as the service account."""
    return storage.Client(
        project=account.project_id,
        credentials=account.to_credentials(),
    )
