"""
Rate limiting for AI endpoints.

Fixed-window request counting per client, applied to the AI query route as
a FastAPI dependency. The counting backend is pluggable; the in-memory one
is enough for a single process.
"""

import hashlib
import logging
import math
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from fastapi import HTTPException, Request, status

from counsel_ai.config import Settings, get_settings

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many AI requests, please try again later"


class RateLimiterBackend(ABC):
    """Abstract base class for rate limiter backends."""

    @abstractmethod
    def check_and_increment(self, key: str, limit: int, window_seconds: int) -> tuple[bool, int, float]:
        """
        Count a request for ``key`` and check it against ``limit``.

        Returns:
            Tuple of (allowed, remaining, seconds_until_reset)
        """

    @abstractmethod
    def reset(self) -> None:
        """Drop all counters."""


@dataclass
class _Window:
    started_at: float
    count: int = 0


class MemoryRateLimiterBackend(RateLimiterBackend):
    """In-process fixed-window counters.

    Each key's window opens on its first request and resets once
    ``window_seconds`` have passed. Requests rejected while over the limit
    do not extend the window.
    """

    def __init__(self, timer: Callable[[], float] = time.monotonic) -> None:
        self._timer = timer
        self._windows: dict[str, _Window] = {}
        self._lock = threading.Lock()

    def check_and_increment(self, key: str, limit: int, window_seconds: int) -> tuple[bool, int, float]:
        now = self._timer()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now - window.started_at >= window_seconds:
                window = _Window(started_at=now)
                self._windows[key] = window
            window.count += 1
            count = window.count
            reset_in = window.started_at + window_seconds - now

        return count <= limit, max(0, limit - count), reset_in

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


class AIRateLimiter:
    """Per-client limit on AI queries.

    Example:
        ```python
        limiter = AIRateLimiter(max_requests=20, window_seconds=900)
        limiter.check("ip:3f1a...")  # raises HTTPException(429) when over the limit
        ```
    """

    def __init__(
        self,
        max_requests: int = 20,
        window_seconds: int = 900,
        backend: RateLimiterBackend | None = None,
    ) -> None:
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._backend = backend if backend is not None else MemoryRateLimiterBackend()

    @classmethod
    def create(cls, settings: Settings | None = None) -> "AIRateLimiter":
        """Factory method to create the limiter from settings."""
        settings = settings or get_settings()
        return cls(
            max_requests=settings.ai_rate_limit_max_requests,
            window_seconds=settings.ai_rate_limit_window_seconds,
        )

    def check(self, client_id: str) -> int:
        """Count a request for a client.

        Returns:
            Requests remaining in the current window

        Raises:
            HTTPException: 429 when the client is over the limit
        """
        allowed, remaining, reset_in = self._backend.check_and_increment(
            client_id, self.max_requests, self.window_seconds
        )
        if allowed:
            return remaining

        retry_after = max(1, math.ceil(reset_in))
        logger.warning(
            "AI rate limit exceeded",
            extra={"client": client_id, "limit": self.max_requests, "retry_after": retry_after},
        )
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=RATE_LIMIT_MESSAGE,
            headers={
                "Retry-After": str(retry_after),
                "RateLimit-Limit": str(self.max_requests),
                "RateLimit-Remaining": "0",
            },
        )

    def reset(self) -> None:
        self._backend.reset()


def client_id_for(request: Request) -> str:
    """Identify the caller by IP address, honoring X-Forwarded-For."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()
    else:
        client_ip = request.client.host if request.client else "unknown"

    # Hash IP for privacy
    return "ip:" + hashlib.sha256(client_ip.encode()).hexdigest()[:16]


def enforce_ai_rate_limit(request: Request) -> None:
    """Dependency that applies the app's AI rate limiter to the caller.

    Raises:
        RuntimeError: If the limiter is not initialized
        HTTPException: 429 when the caller is over the limit
    """
    limiter = getattr(request.app.state, "ai_rate_limiter", None)
    if limiter is None:
        raise RuntimeError("AIRateLimiter not initialized. Check lifespan setup.")
    limiter.check(client_id_for(request))
