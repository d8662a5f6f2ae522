"""Managed secret store protocol."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class SecretStore(Protocol):
    """Protocol for managed secret backends (e.g. a key vault).

    ``get_secret`` may raise on transport or permission errors; the
    ``SecretAccessor`` treats any failure as "not found here" and falls
    back to the environment.
    """

    def get_secret(self, name: str) -> str | None:
        ...
