"""Repository layer for data access.

This layer puts external dependencies (the model endpoint, the response
cache, the secret vault, the interaction log) behind protocol-based
interfaces. This enables:
- Swapping implementations without touching the services
- Unit testing with fresh stores and fake transports
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from counsel_ai.protocols import CompletionClient, InteractionLog, ResponseStore

from .azure_key_vault_store import AzureKeyVaultStore
from .azure_openai_client import AzureOpenAIClient
from .logging_interaction_log import LoggingInteractionLog
from .memory_response_store import MemoryResponseStore

__all__ = [
    "AzureKeyVaultStore",
    "AzureOpenAIClient",
    "CompletionClient",
    "InteractionLog",
    "LoggingInteractionLog",
    "MemoryResponseStore",
    "ResponseStore",
]
