"""HTTP handlers for AI operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, envelopes, and error handling.
"""

import logging
import time

from fastapi import HTTPException, status

from counsel_ai.dto import (
    AIQueryData,
    AIQueryRequest,
    AnalysisData,
    CacheStatsData,
    FeedbackAnalysisRequest,
    FeedbackSummaryData,
    FeedbackSummaryRequest,
    HealthData,
    SuccessEnvelope,
)
from counsel_ai.entities import AIInteraction
from counsel_ai.exceptions import AIServiceError, ErrorKind
from counsel_ai.protocols import InteractionLog
from counsel_ai.services import AIGateway, FeedbackAnalyzer

logger = logging.getLogger(__name__)

SERVICE_NAME = "counsel-ai"


def status_for_error(error: AIServiceError) -> int:
    """HTTP status for an AI gateway failure.

    Invalid input is the caller's fault (400); every other AI failure
    means the assistant is unavailable right now (503).
    """
    if error.kind is ErrorKind.INVALID_INPUT:
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_503_SERVICE_UNAVAILABLE


class AIHandler:
    """HTTP handlers for AI operations.

    This handler delegates business logic to AIGateway and FeedbackAnalyzer
    and handles HTTP-specific concerns like:
    - Converting entities to DTOs
    - Wrapping payloads in the response envelope
    - Reporting interactions to the interaction log

    ``AIServiceError`` is left to propagate; the application's exception
    handler turns it into an error envelope using ``status_for_error``.
    """

    def __init__(
        self,
        gateway: AIGateway,
        analyzer: FeedbackAnalyzer,
        interaction_log: InteractionLog,
    ) -> None:
        """Initialize the AI handler.

        Args:
            gateway: The AI gateway (required).
            analyzer: The feedback analyzer (required).
            interaction_log: Where query interactions are reported (required).
        """
        self._gateway = gateway
        self._analyzer = analyzer
        self._interactions = interaction_log
        self._started_at = time.monotonic()

    async def handle_query(self, request: AIQueryRequest) -> SuccessEnvelope[AIQueryData]:
        """Handle POST /api/ai/query requests.

        Args:
            request: The AI query request DTO

        Returns:
            Envelope with the response text, mode and cache flag

        Raises:
            AIServiceError: If the gateway fails
        """
        start_time = time.time()
        result = await self._gateway.query(request.prompt, request.mode)
        duration_ms = (time.time() - start_time) * 1000

        try:
            self._interactions.record(
                AIInteraction(
                    mode=result.mode,
                    prompt=request.prompt,
                    response=result.text,
                    cached=result.cached,
                    duration_ms=duration_ms,
                )
            )
        except Exception:
            logger.exception("Failed to record AI interaction")

        logger.info(
            "AI query processed",
            extra={"mode": result.mode.value, "duration_ms": round(duration_ms, 1), "cached": result.cached},
        )

        return SuccessEnvelope[AIQueryData](
            data=AIQueryData(response=result.text, mode=result.mode.value, cached=result.cached),
            message="AI query successful",
        )

    async def analyze_feedback(self, request: FeedbackAnalysisRequest) -> SuccessEnvelope[AnalysisData]:
        """Handle POST /api/feedback/analyze requests.

        Never fails because of the model: the analyzer falls back to a
        neutral analysis.
        """
        analysis = await self._analyzer.analyze(request.feedback)

        return SuccessEnvelope[AnalysisData](
            data=AnalysisData(
                rating=analysis.rating,
                sentiment=analysis.sentiment,
                summary=analysis.summary,
                improvement_suggestions=analysis.improvement_suggestions,
                ai_analyzed=analysis.ai_analyzed,
            ),
            message=(
                "Feedback analyzed successfully"
                if analysis.ai_analyzed
                else "Feedback received, AI analysis unavailable"
            ),
        )

    async def summarize_feedback(
        self, request: FeedbackSummaryRequest
    ) -> SuccessEnvelope[FeedbackSummaryData]:
        """Handle POST /api/feedback/summarize requests."""
        summary = await self._analyzer.summarize(request.feedback)
        return SuccessEnvelope[FeedbackSummaryData](
            data=FeedbackSummaryData(summary=summary, count=len(request.feedback)),
            message="Feedback summarized" if summary else "AI summary unavailable",
        )

    async def cache_stats(self) -> SuccessEnvelope[CacheStatsData]:
        """Handle GET /api/ai/cache/stats requests.

        Raises:
            HTTPException: If an error occurs while fetching stats
        """
        try:
            stats = self._gateway.cache_stats()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get cache stats: {e}",
            ) from e

        return SuccessEnvelope[CacheStatsData](
            data=CacheStatsData(size=stats.size, capacity=stats.capacity, ttl=stats.ttl_minutes),
            message="Cache statistics retrieved",
        )

    async def clear_cache(self) -> SuccessEnvelope[CacheStatsData]:
        """Handle DELETE /api/ai/cache requests.

        Raises:
            HTTPException: If the cache could not be cleared
        """
        try:
            self._gateway.clear_cache()
            stats = self._gateway.cache_stats()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to clear cache: {e}",
            ) from e

        return SuccessEnvelope[CacheStatsData](
            data=CacheStatsData(size=stats.size, capacity=stats.capacity, ttl=stats.ttl_minutes),
            message="Cache cleared successfully",
        )

    async def health(self) -> SuccessEnvelope[HealthData]:
        """Handle GET /api/health requests."""
        return SuccessEnvelope[HealthData](
            data=HealthData(
                status="healthy",
                service=SERVICE_NAME,
                uptime=round(time.monotonic() - self._started_at, 3),
                ai_configured=self._gateway.is_configured,
            ),
            message="Service is healthy",
        )
