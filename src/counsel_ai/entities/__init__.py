"""Domain entities for internal representation.

These are pure dataclasses (frozen) passed between the gateway, the
feedback analyzer and the repositories. They are NOT used for API
contracts - use DTOs from the dto package for that.
"""

from .ai_query import AIQuery
from .ai_response import AIResponse
from .cache_stats import CacheStats
from .feedback_analysis import SENTIMENTS, FeedbackAnalysis
from .interaction import AIInteraction

__all__ = [
    "AIQuery",
    "AIResponse",
    "AIInteraction",
    "CacheStats",
    "FeedbackAnalysis",
    "SENTIMENTS",
]
