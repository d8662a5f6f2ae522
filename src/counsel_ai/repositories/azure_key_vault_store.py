"""Azure Key Vault secret store.

Implements the SecretStore protocol on top of ``azure-keyvault-secrets``.
Authentication uses ``DefaultAzureCredential`` (managed identity, CLI login
or environment credentials, whichever is available).
"""

import logging

from azure.core.exceptions import ResourceNotFoundError
from azure.identity import DefaultAzureCredential
from azure.keyvault.secrets import SecretClient

logger = logging.getLogger(__name__)


class AzureKeyVaultStore:
    """Read secrets from an Azure Key Vault.

    A missing secret resolves to None. Any other SDK error (network,
    permissions) propagates so the SecretAccessor can log it and fall back
    to the environment.

    Example:
        ```python
        store = AzureKeyVaultStore.create("my-vault")
        api_key = store.get_secret("AZURE-OPENAI-API-KEY")
        ```
    """

    def __init__(self, client: SecretClient) -> None:
        """Initialize the store.

        Args:
            client: Key Vault secret client (tests pass a fake).
        """
        self._client = client

    @classmethod
    def create(cls, vault_name: str) -> "AzureKeyVaultStore":
        """Factory method to build a store for a vault by name.

        Args:
            vault_name: Key Vault name, e.g. ``counsel-prod``

        Returns:
            AzureKeyVaultStore connected to https://<vault_name>.vault.azure.net
        """
        vault_url = cls.vault_url_for(vault_name)
        client = SecretClient(vault_url=vault_url, credential=DefaultAzureCredential())
        logger.info("Key Vault client initialized", extra={"vault_url": vault_url})
        return cls(client)

    @staticmethod
    def vault_url_for(vault_name: str) -> str:
        return f"https://{vault_name}.vault.azure.net"

    def get_secret(self, name: str) -> str | None:
        """Get the current value of a secret.

        Args:
            name: Secret name in the vault

        Returns:
            The secret value, or None if the vault has no such secret
        """
        try:
            secret = self._client.get_secret(name)
        except ResourceNotFoundError:
            logger.debug("Secret not found in Key Vault", extra={"secret": name})
            return None
        return secret.value
