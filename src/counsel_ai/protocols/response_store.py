"""Response cache storage protocol.

Defines the interface for any bounded, expiring key/value store that can
hold model responses keyed by normalized ``mode:prompt`` strings.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ResponseStore(Protocol):
    """Protocol for response cache backends.

    Implementations must keep at most ``capacity`` entries, evicting the
    least recently used one on overflow, and must never return an entry
    older than ``ttl_seconds``. Reads do not extend an entry's lifetime.
    """

    @property
    def capacity(self) -> int:
        """Maximum number of entries held."""
        ...

    @property
    def ttl_seconds(self) -> float:
        """Lifetime of an entry, measured from insertion."""
        ...

    def get(self, key: str) -> str | None:
        """Return the cached response, or None if absent or expired."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a response, evicting the least recently used entry if full."""
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...

    def __len__(self) -> int:
        ...
