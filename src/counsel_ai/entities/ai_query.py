"""AI query domain entity."""

from dataclasses import dataclass

from counsel_ai.modes import Mode, cache_key


@dataclass(frozen=True)
class AIQuery:
    """A single request to the AI gateway.

    Transient: built per call and never persisted.

    Attributes:
        prompt: The user prompt (non-empty)
        mode: The request profile
        temperature: Sampling temperature override
        max_tokens: Output budget override
        top_p: Nucleus sampling override
    """

    prompt: str
    mode: Mode
    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None

    @property
    def cache_key(self) -> str:
        return cache_key(self.mode, self.prompt)
