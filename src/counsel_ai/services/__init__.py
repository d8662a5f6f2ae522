"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from counsel_ai.services import AIGateway, FeedbackAnalyzer

    # Using factory method (recommended)
    gateway = AIGateway.create()
    analyzer = FeedbackAnalyzer(gateway=gateway)

    # Or manual creation
    gateway = AIGateway(store=store, client=client)
    ```
"""

from .ai_gateway import AIGateway
from .feedback_analyzer import FeedbackAnalyzer

__all__ = [
    "AIGateway",
    "FeedbackAnalyzer",
]
