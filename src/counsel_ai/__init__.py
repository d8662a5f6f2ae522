"""Counsel AI - cached AI assistant and feedback analysis.

This package provides a layered architecture for the AI features of a
student-counselor appointment service:

Layers:
    - protocols: Interface contracts (ResponseStore, CompletionClient, ...)
    - repositories: Data access implementations
    - services: Business logic (AIGateway, FeedbackAnalyzer)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from counsel_ai.services import AIGateway, FeedbackAnalyzer

    gateway = AIGateway.create()
    result = await gateway.query("How do I book an appointment?", "chat")

    analyzer = FeedbackAnalyzer(gateway=gateway)
    analysis = await analyzer.analyze("Great session, really helped me plan my semester!")
    ```

For HTTP API:
    ```python
    from counsel_ai.api.app import app
    ```
"""

from counsel_ai.config import Settings, get_settings
from counsel_ai.entities import AIQuery, AIResponse, CacheStats, FeedbackAnalysis
from counsel_ai.exceptions import (
    AIServiceError,
    AuthenticationFailed,
    ErrorKind,
    InvalidInput,
    RateLimited,
    RequestTimeout,
    ServiceUnavailable,
)
from counsel_ai.modes import MODE_PROFILES, Mode
from counsel_ai.protocols import CompletionClient, ResponseStore
from counsel_ai.repositories import AzureOpenAIClient, MemoryResponseStore
from counsel_ai.secret_accessor import SecretAccessor
from counsel_ai.services import AIGateway, FeedbackAnalyzer

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    "SecretAccessor",
    # Modes
    "Mode",
    "MODE_PROFILES",
    # Protocols (interfaces)
    "CompletionClient",
    "ResponseStore",
    # Services (business logic)
    "AIGateway",
    "FeedbackAnalyzer",
    # Repositories (data access)
    "AzureOpenAIClient",
    "MemoryResponseStore",
    # Entities (domain models)
    "AIQuery",
    "AIResponse",
    "CacheStats",
    "FeedbackAnalysis",
    # Errors
    "AIServiceError",
    "ErrorKind",
    "InvalidInput",
    "ServiceUnavailable",
    "AuthenticationFailed",
    "RateLimited",
    "RequestTimeout",
]
