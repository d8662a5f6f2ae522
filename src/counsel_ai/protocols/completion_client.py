"""Chat completion client protocol.

Defines the interface for the external language-model endpoint used on
cache misses.
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class CompletionResult:
    """Text and usage block extracted from a chat completion response."""

    text: str
    usage: dict[str, Any] | None = None


@runtime_checkable
class CompletionClient(Protocol):
    """Protocol for chat completion backends.

    Implementations translate every failure into an ``AIServiceError``
    subclass and never retry.
    """

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        max_tokens: int,
        temperature: float,
        top_p: float,
    ) -> CompletionResult:
        """Send one chat completion request.

        Args:
            messages: Chat messages (``role``/``content`` dicts)
            max_tokens: Output budget
            temperature: Sampling temperature
            top_p: Nucleus sampling parameter

        Returns:
            The completion text and usage

        Raises:
            AIServiceError: On any transport, status or body failure
        """
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...
