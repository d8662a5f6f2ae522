"""AI interaction record."""

from dataclasses import dataclass

from counsel_ai.modes import Mode


@dataclass(frozen=True)
class AIInteraction:
    """One model interaction handed to the interaction log.

    Attributes:
        mode: The mode of the query
        prompt: The prompt sent
        response: The raw response text (empty when the call failed)
        cached: Whether the response came from the cache
        duration_ms: Wall time spent in the gateway
        succeeded: False when the response could not be used
    """

    mode: Mode
    prompt: str
    response: str
    cached: bool
    duration_ms: float = 0.0
    succeeded: bool = True
