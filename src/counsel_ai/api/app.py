from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from counsel_ai.api.dependencies import AIRateLimitDep, HandlerDep, create_lifespan
from counsel_ai.api.rate_limit import AIRateLimiter
from counsel_ai.config import Settings, get_settings
from counsel_ai.dto import (
    AIQueryData,
    AIQueryRequest,
    AnalysisData,
    CacheStatsData,
    ErrorBody,
    ErrorEnvelope,
    FeedbackAnalysisRequest,
    FeedbackSummaryData,
    FeedbackSummaryRequest,
    HealthData,
    SuccessEnvelope,
)
from counsel_ai.exceptions import AIServiceError
from counsel_ai.handlers import status_for_error
from counsel_ai.protocols import InteractionLog
from counsel_ai.secret_accessor import SecretAccessor
from counsel_ai.services import AIGateway


def _error_response(
    status_code: int,
    message: str,
    kind: str | None = None,
    details: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    envelope = ErrorEnvelope(error=ErrorBody(message=message, code=status_code, kind=kind, details=details))
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(exclude_none=True),
        headers=headers,
    )


async def ai_service_error_handler(request: Request, exc: AIServiceError) -> JSONResponse:
    return _error_response(status_for_error(exc), exc.message, kind=exc.kind.value)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"field": ".".join(str(part) for part in err.get("loc", ())[1:]), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    return _error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", details=details)


def create_app(
    settings: Settings | None = None,
    gateway: AIGateway | None = None,
    interaction_log: InteractionLog | None = None,
    secrets: SecretAccessor | None = None,
    rate_limiter: AIRateLimiter | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Application settings. If None, uses get_settings() at startup.
        gateway: Prebuilt AI gateway (tests pass one with a fake client).
        interaction_log: Interaction log collaborator.
        secrets: Secret accessor used to resolve the API key.
        rate_limiter: Limiter for AI queries (tests pass one with a fake clock).

    Returns:
        The configured FastAPI app
    """
    app = FastAPI(
        title="Counsel AI API",
        description="AI assistant and feedback analysis for student-counselor appointments",
        version="0.1.0",
        lifespan=create_lifespan(
            settings=settings,
            gateway=gateway,
            interaction_log=interaction_log,
            secrets=secrets,
            rate_limiter=rate_limiter,
        ),
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AIServiceError, ai_service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]

    @app.get("/api/health", response_model=SuccessEnvelope[HealthData])
    async def health(handler: HandlerDep) -> SuccessEnvelope[HealthData]:
        """Health check endpoint."""
        return await handler.health()

    @app.post(
        "/api/ai/query",
        response_model=SuccessEnvelope[AIQueryData],
        dependencies=[AIRateLimitDep],
    )
    async def ai_query(request: AIQueryRequest, handler: HandlerDep) -> SuccessEnvelope[AIQueryData]:
        """Ask the AI assistant a question in one of the supported modes."""
        return await handler.handle_query(request)

    @app.get("/api/ai/cache/stats", response_model=SuccessEnvelope[CacheStatsData])
    async def ai_cache_stats(handler: HandlerDep) -> SuccessEnvelope[CacheStatsData]:
        """Get AI response cache statistics."""
        return await handler.cache_stats()

    @app.delete("/api/ai/cache", response_model=SuccessEnvelope[CacheStatsData])
    async def ai_cache_clear(handler: HandlerDep) -> SuccessEnvelope[CacheStatsData]:
        """Clear the AI response cache."""
        return await handler.clear_cache()

    @app.post("/api/feedback/analyze", response_model=SuccessEnvelope[AnalysisData])
    async def feedback_analyze(
        request: FeedbackAnalysisRequest, handler: HandlerDep
    ) -> SuccessEnvelope[AnalysisData]:
        """Analyze feedback into a rating, sentiment and summary."""
        return await handler.analyze_feedback(request)

    @app.post("/api/feedback/summarize", response_model=SuccessEnvelope[FeedbackSummaryData])
    async def feedback_summarize(
        request: FeedbackSummaryRequest, handler: HandlerDep
    ) -> SuccessEnvelope[FeedbackSummaryData]:
        """Summarize several pieces of feedback."""
        return await handler.summarize_feedback(request)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "counsel_ai.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
