"""Secret lookup with fallback to environment variables.

A managed secret store (any ``SecretStore``) is consulted first when one is
wired in; the environment is the fallback. A secret that cannot be found
anywhere resolves to None so the caller can degrade instead of crashing.
"""

import logging
import os
from collections.abc import Iterable, Mapping

from counsel_ai.config import Settings, get_settings
from counsel_ai.protocols import SecretStore
from counsel_ai.repositories import AzureKeyVaultStore

logger = logging.getLogger(__name__)


class SecretAccessor:
    """Resolve secrets from a secret store, then from the environment.

    Example:
        ```python
        secrets = SecretAccessor()
        api_key = secrets.get_secret("AZURE-OPENAI-API-KEY", "AZURE_OPENAI_API_KEY")
        ```
    """

    def __init__(
        self,
        store: SecretStore | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the accessor.

        Args:
            store: Optional managed secret store, tried first.
            environ: Environment mapping. Defaults to os.environ.
        """
        self._store = store
        self._environ = environ if environ is not None else os.environ
        if store is None:
            logger.info("Secret store not configured, using environment variables")

    @classmethod
    def create(cls, settings: Settings | None = None) -> "SecretAccessor":
        """Factory method: use Azure Key Vault when a vault name is configured.

        Args:
            settings: Application settings. If None, uses get_settings().

        Returns:
            SecretAccessor backed by the vault, or by the environment alone
        """
        settings = settings or get_settings()
        if not settings.key_vault_enabled:
            return cls()

        try:
            store = AzureKeyVaultStore.create(settings.key_vault_name)
        except Exception as e:
            logger.error("Failed to initialize Key Vault client", extra={"error": str(e)})
            return cls()
        return cls(store=store)

    def get_secret(self, name: str, fallback_env_name: str | None = None) -> str | None:
        """Get a secret by name.

        Args:
            name: Secret name in the store.
            fallback_env_name: Environment variable to try next. Defaults to ``name``.

        Returns:
            The secret value, or None if it is not available anywhere
        """
        if self._store is not None:
            try:
                value = self._store.get_secret(name)
            except Exception as e:
                logger.warning("Failed to retrieve secret from store", extra={"secret": name, "error": str(e)})
            else:
                if value:
                    logger.debug("Retrieved secret from store", extra={"secret": name})
                    return value

        env_name = fallback_env_name or name
        value = self._environ.get(env_name)
        if value:
            logger.debug("Using environment variable as fallback", extra={"env_var": env_name})
            return value

        logger.error("Secret not found in secret store or environment", extra={"secret": name})
        return None

    def get_secrets(self, secrets: Iterable[tuple[str, str | None]]) -> dict[str, str | None]:
        """Resolve several ``(name, fallback_env_name)`` pairs at once."""
        return {name: self.get_secret(name, env_name) for name, env_name in secrets}
