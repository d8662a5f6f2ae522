"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping the response cache backend or the model endpoint
- Unit testing with fresh stores and fake clients
- Clear separation of concerns

Usage:
    ```python
    from counsel_ai.protocols import CompletionClient, ResponseStore

    store: ResponseStore = MemoryResponseStore(capacity=100, ttl_seconds=600)
    client: CompletionClient = AzureOpenAIClient.create(settings, api_key)
    ```
"""

from .completion_client import CompletionClient, CompletionResult
from .interaction_log import InteractionLog
from .response_store import ResponseStore
from .secret_store import SecretStore

__all__ = [
    "CompletionClient",
    "CompletionResult",
    "InteractionLog",
    "ResponseStore",
    "SecretStore",
]
