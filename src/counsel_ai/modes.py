"""AI request modes and their system instructions.

Each mode maps to a ``ModeProfile`` holding the system message sent ahead of
the user prompt and an optional output budget. Adding a mode means adding an
enum member and a table entry; call sites never branch on mode.
"""

from dataclasses import dataclass
from enum import Enum

from counsel_ai.exceptions import InvalidInput


class Mode(str, Enum):
    """Named request profiles accepted by the AI gateway."""

    CHAT = "chat"
    WELLBEING_TIPS = "wellbeing_tips"
    RECOMMENDATION = "recommendation"
    ANALYZE_FEEDBACK = "analyzeFeedback"
    SUMMARIZE_FEEDBACK = "summarizeFeedback"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "str | Mode") -> "Mode":
        """Return the mode named by ``value``.

        Raises:
            InvalidInput: If ``value`` is not a known mode.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise InvalidInput(f"Invalid mode. Must be one of: {valid}") from None


@dataclass(frozen=True)
class ModeProfile:
    """System instruction and output budget for one mode.

    Attributes:
        system_template: System message sent before the user prompt
        max_tokens: Output budget, or None to use the configured default
    """

    system_template: str
    max_tokens: int | None = None


MODE_PROFILES: dict[Mode, ModeProfile] = {
    Mode.CHAT: ModeProfile(
        system_template=(
            "You are a helpful AI assistant for a counselor appointment scheduler. "
            "Provide concise, supportive, and helpful responses. Never provide medical "
            "advice or diagnoses. If a student mentions serious mental health concerns, "
            "suicide, self-harm, or crisis situations, always recommend they contact a "
            "real counselor immediately or call emergency services. Keep responses "
            "positive and safe."
        ),
    ),
    Mode.WELLBEING_TIPS: ModeProfile(
        system_template=(
            "You are a wellbeing assistant providing general wellness tips and stress "
            "management advice. Provide simple, actionable, and positive suggestions for "
            "students. Never provide medical advice or diagnoses. Keep responses brief "
            "and supportive. If serious issues are mentioned, recommend consulting a "
            "real counselor."
        ),
    ),
    Mode.RECOMMENDATION: ModeProfile(
        system_template=(
            "You are an AI counselor recommendation assistant. Based on the student's "
            "needs, suggest the most suitable counselor type (Academic, Career, Personal, "
            "or Mental Health) and explain why. Be concise and helpful. For serious "
            "mental health concerns, always recommend Mental Health counselors and "
            "suggest seeking immediate help."
        ),
    ),
    Mode.ANALYZE_FEEDBACK: ModeProfile(
        system_template=(
            "You are an AI feedback analyzer. Analyze the student feedback and return a "
            'JSON object with: {"rating": <1-5>, "sentiment": "<positive|neutral|negative>", '
            '"summary": "<brief summary>", "improvementSuggestions": "<optional suggestions '
            'for counselor>"}. Base rating on the overall tone and content. Be objective '
            "and constructive."
        ),
        max_tokens=300,
    ),
    Mode.SUMMARIZE_FEEDBACK: ModeProfile(
        system_template=(
            "You are an AI assistant that summarizes student feedback. Extract key points, "
            "sentiment, and actionable insights. Be concise."
        ),
    ),
}


def get_profile(mode: Mode) -> ModeProfile:
    return MODE_PROFILES[mode]


def cache_key(mode: Mode, prompt: str) -> str:
    """Build the normalized ``mode:prompt`` cache key."""
    return f"{mode.value}:{prompt.strip().lower()}"
