"""AI interaction log protocol."""

from typing import Protocol, runtime_checkable

from counsel_ai.entities import AIInteraction


@runtime_checkable
class InteractionLog(Protocol):
    """Protocol for recording model interactions.

    Recording is advisory. Callers treat a failing log as non-fatal.
    """

    def record(self, interaction: AIInteraction) -> None:
        ...
