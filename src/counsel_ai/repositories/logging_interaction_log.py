"""Interaction log that writes to the application log.

Used when no persistent interaction store is wired in. Prompts and
responses are logged as truncated previews only.
"""

import logging

from counsel_ai.entities import AIInteraction
from counsel_ai.utils import preview

logger = logging.getLogger(__name__)


class LoggingInteractionLog:
    """InteractionLog implementation backed by ``logging``."""

    def __init__(self, preview_length: int = 80) -> None:
        self._preview_length = preview_length

    def record(self, interaction: AIInteraction) -> None:
        logger.info(
            "AI interaction",
            extra={
                "mode": interaction.mode.value,
                "cached": interaction.cached,
                "succeeded": interaction.succeeded,
                "duration_ms": round(interaction.duration_ms, 1),
                "prompt_preview": preview(interaction.prompt, self._preview_length),
                "response_preview": preview(interaction.response, self._preview_length),
            },
        )
