"""In-memory implementation of ResponseStore.

Backed by ``cachetools.TTLCache``, which evicts the least recently used
entry when full and expires entries a fixed time after insertion. Reads
refresh recency but not lifetime. The cache is rebuilt empty on every
process start.
"""

import threading
import time
from collections.abc import Callable

from cachetools import TTLCache

from counsel_ai.config import Settings, get_settings


class MemoryResponseStore:
    """Thread-safe, bounded, expiring response cache.

    This class satisfies the ResponseStore protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        store = MemoryResponseStore(capacity=100, ttl_seconds=600)
        store.set("chat:hello", "Hi there!")
        store.get("chat:hello")  # "Hi there!"
        ```
    """

    def __init__(
        self,
        capacity: int = 100,
        ttl_seconds: float = 600,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the store.

        Args:
            capacity: Maximum number of entries.
            ttl_seconds: Lifetime of an entry from insertion.
            timer: Clock used for expiry. Tests pass a fake clock.
        """
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        self._capacity = capacity
        self._ttl = ttl_seconds
        self._cache: TTLCache = TTLCache(maxsize=capacity, ttl=ttl_seconds, timer=timer)
        self._lock = threading.Lock()

    @classmethod
    def create(cls, settings: Settings | None = None) -> "MemoryResponseStore":
        """Factory method to create a store sized from settings.

        Args:
            settings: Application settings. If None, uses get_settings().

        Returns:
            Configured MemoryResponseStore
        """
        settings = settings or get_settings()
        return cls(
            capacity=settings.cache_max_entries,
            ttl_seconds=settings.cache_ttl_seconds,
        )

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._cache.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._cache[key] = value

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def keys(self) -> list[str]:
        """Keys of live entries."""
        with self._lock:
            self._cache.expire()
            return list(self._cache.keys())

    def __len__(self) -> int:
        with self._lock:
            self._cache.expire()
            return len(self._cache)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._cache
