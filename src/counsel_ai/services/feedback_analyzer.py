"""Feedback analysis through the AI gateway.

Turns free-text student feedback into a rating, a sentiment and a short
summary. Submission of feedback must never fail because the model is
unreachable or answers badly, so every failure degrades to
``FeedbackAnalysis.fallback()``.
"""

import logging
import math
import time
from collections.abc import Sequence
from typing import Any

from counsel_ai.entities import SENTIMENTS, AIInteraction, FeedbackAnalysis
from counsel_ai.entities.feedback_analysis import FALLBACK_RATING, FALLBACK_SENTIMENT
from counsel_ai.exceptions import AIServiceError, ResponseParseError
from counsel_ai.modes import Mode
from counsel_ai.protocols import InteractionLog
from counsel_ai.repositories import LoggingInteractionLog
from counsel_ai.services.ai_gateway import AIGateway
from counsel_ai.utils import parse_json_object, preview

logger = logging.getLogger(__name__)

ANALYSIS_TEMPERATURE = 0.3
ANALYSIS_MAX_TOKENS = 300

REQUIRED_FIELDS = ("rating", "sentiment", "summary")

ANALYSIS_PROMPT = """Analyze this student feedback about a counseling session and provide structured analysis:

Feedback: "{feedback}"

Return a JSON object with the following structure:
{{
  "rating": <number 1-5 based on sentiment and content>,
  "sentiment": "<positive|neutral|negative>",
  "summary": "<1-2 sentence summary of key points>",
  "improvementSuggestions": "<optional constructive suggestions for the counselor>"
}}

Be objective, constructive, and professional. Base the rating on overall satisfaction expressed."""

SUMMARY_PROMPT = """Summarize the following student feedback for a counselor:

{items}"""


def build_analysis_prompt(feedback_text: str) -> str:
    return ANALYSIS_PROMPT.format(feedback=feedback_text)


def normalize_rating(value: Any) -> int:
    """Coerce a model-supplied rating into 1-5, defaulting to 3."""
    if isinstance(value, bool):
        return FALLBACK_RATING

    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return FALLBACK_RATING

    if isinstance(value, float):
        if not math.isfinite(value) or not 1 <= value <= 5:
            return FALLBACK_RATING
        value = int(round(value))

    if not isinstance(value, int) or not 1 <= value <= 5:
        return FALLBACK_RATING
    return value


def normalize_sentiment(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in SENTIMENTS:
        return value.strip().lower()
    return FALLBACK_SENTIMENT


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def analysis_from_payload(payload: dict[str, Any]) -> FeedbackAnalysis:
    """Validate a parsed model payload into a FeedbackAnalysis.

    Raises:
        ResponseParseError: If a required field is missing
    """
    missing = [name for name in REQUIRED_FIELDS if _is_missing(payload.get(name))]
    if missing:
        raise ResponseParseError(f"Incomplete AI analysis, missing: {', '.join(missing)}")

    suggestions = payload.get("improvementSuggestions")
    if _is_missing(suggestions):
        suggestions = None
    elif not isinstance(suggestions, str):
        suggestions = str(suggestions)

    return FeedbackAnalysis(
        rating=normalize_rating(payload["rating"]),
        sentiment=normalize_sentiment(payload["sentiment"]),
        summary=str(payload["summary"]).strip(),
        improvement_suggestions=suggestions,
        ai_analyzed=True,
    )


class FeedbackAnalyzer:
    """Structured feedback analysis with a neutral fallback.

    Example:
        ```python
        analyzer = FeedbackAnalyzer(gateway=AIGateway.create())
        analysis = await analyzer.analyze("Great session, really helped me!")
        print(analysis.rating, analysis.sentiment)
        ```
    """

    def __init__(self, gateway: AIGateway, interaction_log: InteractionLog | None = None) -> None:
        """Initialize the analyzer.

        Args:
            gateway: The AI gateway (required).
            interaction_log: Where attempts are reported. Defaults to the application log.
        """
        self._gateway = gateway
        self._interactions = interaction_log if interaction_log is not None else LoggingInteractionLog()

    async def analyze(self, feedback_text: str) -> FeedbackAnalysis:
        """Analyze feedback text. Never raises.

        Args:
            feedback_text: The student's feedback, embedded verbatim in the prompt

        Returns:
            The model's analysis, normalized, or the fallback analysis
        """
        prompt = build_analysis_prompt(feedback_text)
        start_time = time.time()

        try:
            result = await self._gateway.query(
                prompt,
                Mode.ANALYZE_FEEDBACK,
                temperature=ANALYSIS_TEMPERATURE,
                max_tokens=ANALYSIS_MAX_TOKENS,
            )
        except AIServiceError as e:
            logger.warning(
                "AI analysis unavailable, using default values",
                extra={"error_kind": e.kind.value, "error": e.message},
            )
            return FeedbackAnalysis.fallback()
        except Exception:
            logger.exception("AI analysis failed unexpectedly, using default values")
            return FeedbackAnalysis.fallback()

        duration_ms = (time.time() - start_time) * 1000

        try:
            analysis = analysis_from_payload(parse_json_object(result.text))
        except ResponseParseError as e:
            logger.error(
                "Failed to parse AI analysis",
                extra={"error": str(e), "response_preview": preview(result.text)},
            )
            self._report(prompt, result.text, result.cached, duration_ms, succeeded=False)
            return FeedbackAnalysis.fallback()

        self._report(prompt, result.text, result.cached, duration_ms, succeeded=True)
        return analysis

    async def summarize(self, feedback_texts: Sequence[str]) -> str | None:
        """Summarize several pieces of feedback into key points.

        Args:
            feedback_texts: Feedback entries, e.g. all feedback for one counselor

        Returns:
            The summary text, or None if there is nothing to summarize or the model failed
        """
        items = [text.strip() for text in feedback_texts if text and text.strip()]
        if not items:
            return None

        prompt = SUMMARY_PROMPT.format(items="\n".join(f"- {item}" for item in items))
        try:
            result = await self._gateway.query(prompt, Mode.SUMMARIZE_FEEDBACK)
        except AIServiceError as e:
            logger.warning(
                "AI feedback summary unavailable",
                extra={"error_kind": e.kind.value, "count": len(items)},
            )
            return None

        self._report(prompt, result.text, result.cached, 0.0, succeeded=True, mode=Mode.SUMMARIZE_FEEDBACK)
        return result.text.strip()

    def _report(
        self,
        prompt: str,
        response: str,
        cached: bool,
        duration_ms: float,
        succeeded: bool,
        mode: Mode = Mode.ANALYZE_FEEDBACK,
    ) -> None:
        try:
            self._interactions.record(
                AIInteraction(
                    mode=mode,
                    prompt=prompt,
                    response=response,
                    cached=cached,
                    duration_ms=duration_ms,
                    succeeded=succeeded,
                )
            )
        except Exception:
            logger.exception("Failed to record AI interaction")
