"""Cache statistics domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of the response cache.

    Attributes:
        size: Entries currently held (expired entries may linger until the next access)
        capacity: Maximum number of entries
        ttl_minutes: Lifetime of an entry from insertion
    """

    size: int
    capacity: int
    ttl_minutes: int
