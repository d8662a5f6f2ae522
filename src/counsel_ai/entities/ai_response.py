"""AI response domain entity."""

from dataclasses import dataclass
from typing import Any

from counsel_ai.modes import Mode


@dataclass(frozen=True)
class AIResponse:
    """Model output returned by the AI gateway.

    Attributes:
        text: The completion text
        mode: The mode the query ran under
        cached: True when served from the response cache
        token_usage: The model's usage block, None for cache hits
    """

    text: str
    mode: Mode
    cached: bool
    token_usage: dict[str, Any] | None = None

    @property
    def total_tokens(self) -> int | None:
        if not self.token_usage:
            return None
        return self.token_usage.get("total_tokens")
