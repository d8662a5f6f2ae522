"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import AIQueryRequest, FeedbackAnalysisRequest, FeedbackSummaryRequest
from .responses import (
    AIQueryData,
    AnalysisData,
    CacheStatsData,
    ErrorBody,
    ErrorEnvelope,
    FeedbackSummaryData,
    HealthData,
    SuccessEnvelope,
)

__all__ = [
    "AIQueryRequest",
    "FeedbackAnalysisRequest",
    "FeedbackSummaryRequest",
    "AIQueryData",
    "AnalysisData",
    "CacheStatsData",
    "FeedbackSummaryData",
    "HealthData",
    "ErrorBody",
    "ErrorEnvelope",
    "SuccessEnvelope",
]
