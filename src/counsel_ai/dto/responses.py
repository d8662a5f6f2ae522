"""Response DTOs for API endpoints.

Every endpoint answers with an envelope:
``{success, data, message, timestamp}`` on success and
``{success: false, error: {message, code, kind}, timestamp}`` on failure.
"""

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class SuccessEnvelope(BaseModel, Generic[T]):
    """Response envelope for successful requests."""

    success: bool = True
    data: T | None = None
    message: str = "Success"
    timestamp: str = Field(default_factory=_utcnow)


class ErrorBody(BaseModel):
    message: str = Field(..., description="Human-readable error message")
    code: int = Field(..., description="HTTP status code")
    kind: str | None = Field(None, description="AI error kind, when the failure came from the AI layer")
    details: list[dict[str, Any]] | None = None


class ErrorEnvelope(BaseModel):
    """Response envelope for failed requests."""

    success: bool = False
    error: ErrorBody
    timestamp: str = Field(default_factory=_utcnow)


class AIQueryData(BaseModel):
    """Payload of a successful AI query."""

    response: str = Field(..., description="The model's answer")
    mode: str = Field(..., description="The mode the query ran under")
    cached: bool = Field(..., description="Whether the answer came from the cache")


class AnalysisData(BaseModel):
    """Payload of a feedback analysis."""

    model_config = ConfigDict(populate_by_name=True)

    rating: int = Field(..., ge=1, le=5)
    sentiment: str
    summary: str
    improvement_suggestions: str | None = Field(None, alias="improvementSuggestions")
    ai_analyzed: bool = Field(..., alias="aiAnalyzed")


class FeedbackSummaryData(BaseModel):
    summary: str | None = Field(None, description="Summary text, null when the model was unavailable")
    count: int = Field(..., ge=0)


class CacheStatsData(BaseModel):
    """Response cache statistics."""

    size: int = Field(..., description="Entries currently cached", ge=0)
    capacity: int = Field(..., description="Maximum number of entries", ge=1)
    ttl: int = Field(..., description="Entry lifetime in minutes", ge=0)


class HealthData(BaseModel):
    status: str = Field(..., description="Health status: 'healthy'")
    service: str
    timestamp: str = Field(default_factory=_utcnow)
    uptime: float = Field(..., description="Seconds since startup", ge=0)
    ai_configured: bool = Field(..., description="Whether an AI API key is available")
