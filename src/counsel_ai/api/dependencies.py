"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services built in the lifespan and stored in app.state
    - Dependency functions retrieve from request.app.state
    - Prebuilt components can be passed in (tests inject fakes)
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from counsel_ai.api.rate_limit import AIRateLimiter, enforce_ai_rate_limit
from counsel_ai.config import Settings, get_settings
from counsel_ai.handlers import AIHandler
from counsel_ai.logging_config import configure_logging
from counsel_ai.protocols import InteractionLog
from counsel_ai.repositories import LoggingInteractionLog
from counsel_ai.secret_accessor import SecretAccessor
from counsel_ai.services import AIGateway, FeedbackAnalyzer

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> AIHandler:
    """Dependency injection for AIHandler from app.state.

    Raises:
        RuntimeError: If the handler is not initialized
    """
    handler = getattr(request.app.state, "ai_handler", None)
    if handler is None:
        raise RuntimeError("AIHandler not initialized. Check lifespan setup.")
    return handler


def create_lifespan(
    settings: Settings | None = None,
    gateway: AIGateway | None = None,
    interaction_log: InteractionLog | None = None,
    secrets: SecretAccessor | None = None,
    rate_limiter: AIRateLimiter | None = None,
):
    """Build the lifespan context manager for the app.

    Args:
        settings: Application settings. If None, uses get_settings().
        gateway: Prebuilt gateway. If None, AIGateway.create() is used.
        interaction_log: Interaction log. If None, logs through ``logging``.
        secrets: Secret accessor used when building the gateway. If None,
            built from settings (Key Vault when configured).
        rate_limiter: AI query rate limiter. If None, built from settings.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize all layers and store them in app.state:
        1. Gateway (cache + completion client) - app.state.ai_gateway
        2. Analyzer (feedback analysis) - app.state.feedback_analyzer
        3. Handler (HTTP endpoints) - app.state.ai_handler
        4. Rate limiter (AI queries) - app.state.ai_rate_limiter
        """
        cfg = settings or get_settings()
        configure_logging(cfg.log_level, cfg.log_format)

        ai_gateway = gateway if gateway is not None else AIGateway.create(cfg, secrets)
        log = interaction_log if interaction_log is not None else LoggingInteractionLog()
        analyzer = FeedbackAnalyzer(gateway=ai_gateway, interaction_log=log)

        app.state.ai_gateway = ai_gateway
        app.state.feedback_analyzer = analyzer
        app.state.ai_handler = AIHandler(gateway=ai_gateway, analyzer=analyzer, interaction_log=log)
        app.state.ai_rate_limiter = rate_limiter if rate_limiter is not None else AIRateLimiter.create(cfg)

        stats = ai_gateway.cache_stats()
        logger.info(
            "AI service initialized",
            extra={
                "ai_configured": ai_gateway.is_configured,
                "cache_capacity": stats.capacity,
                "cache_ttl_minutes": stats.ttl_minutes,
                "ai_rate_limit": app.state.ai_rate_limiter.max_requests,
            },
        )

        yield

        await ai_gateway.aclose()
        del app.state.ai_rate_limiter
        del app.state.ai_handler
        del app.state.feedback_analyzer
        del app.state.ai_gateway
        logger.info("AI service shut down")

    return lifespan


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[AIHandler, Depends(get_handler)]

# Route-level dependency for rate-limited AI endpoints
AIRateLimitDep = Depends(enforce_ai_rate_limit)
