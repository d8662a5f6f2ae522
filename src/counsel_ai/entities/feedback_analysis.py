"""Feedback analysis domain entity."""

from dataclasses import dataclass
from typing import Any

SENTIMENTS = ("positive", "neutral", "negative")

FALLBACK_RATING = 3
FALLBACK_SENTIMENT = "neutral"
FALLBACK_SUMMARY = "Thank you for your feedback."


@dataclass(frozen=True)
class FeedbackAnalysis:
    """Structured reading of a piece of student feedback.

    Attributes:
        rating: Satisfaction from 1 to 5
        sentiment: One of ``SENTIMENTS``
        summary: Short summary of the feedback
        improvement_suggestions: Optional suggestions for the counselor
        ai_analyzed: True when the values came from the model
    """

    rating: int
    sentiment: str
    summary: str
    improvement_suggestions: str | None = None
    ai_analyzed: bool = False

    @classmethod
    def fallback(cls) -> "FeedbackAnalysis":
        """The neutral analysis used whenever the model cannot be used."""
        return cls(
            rating=FALLBACK_RATING,
            sentiment=FALLBACK_SENTIMENT,
            summary=FALLBACK_SUMMARY,
            improvement_suggestions=None,
            ai_analyzed=False,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "rating": self.rating,
            "sentiment": self.sentiment,
            "summary": self.summary,
            "improvementSuggestions": self.improvement_suggestions,
            "aiAnalyzed": self.ai_analyzed,
        }
