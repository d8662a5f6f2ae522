"""AI gateway for model queries.

This service turns a (prompt, mode) pair into model output, serving
repeated requests from a bounded, expiring response cache.
"""

import logging
import math
import time

from counsel_ai.config import Settings, get_settings
from counsel_ai.entities import AIQuery, AIResponse, CacheStats
from counsel_ai.exceptions import AIServiceError, InvalidInput
from counsel_ai.modes import Mode, get_profile
from counsel_ai.protocols import CompletionClient, ResponseStore
from counsel_ai.repositories import AzureOpenAIClient, MemoryResponseStore
from counsel_ai.secret_accessor import SecretAccessor
from counsel_ai.utils import preview

logger = logging.getLogger(__name__)

API_KEY_SECRET = "AZURE-OPENAI-API-KEY"
API_KEY_ENV = "AZURE_OPENAI_API_KEY"


class AIGateway:
    """Cached access to the chat completion endpoint.

    This service depends on PROTOCOLS, not concrete implementations:
    - ResponseStore: in-memory TTL/LRU cache, or any compatible store
    - CompletionClient: Azure OpenAI, or a fake in tests

    Identical requests (same mode, same prompt after trimming and
    lower-casing) are answered from the cache until their entry expires.
    Concurrent identical misses are not de-duplicated; each calls the
    model and the last write wins.

    Example:
        ```python
        gateway = AIGateway.create()
        result = await gateway.query("How do I book an appointment?", "chat")
        print(result.text, result.cached)
        ```
    """

    def __init__(
        self,
        store: ResponseStore,
        client: CompletionClient,
        settings: Settings | None = None,
        configured: bool = True,
    ) -> None:
        """Initialize the gateway.

        Args:
            store: Response cache (required).
            client: Chat completion client (required).
            settings: Sampling defaults. If None, uses get_settings().
            configured: Whether an API key was resolved at startup.
        """
        self._store = store
        self._client = client
        self._settings = settings or get_settings()
        self._configured = configured

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        secrets: SecretAccessor | None = None,
        store: ResponseStore | None = None,
        client: CompletionClient | None = None,
    ) -> "AIGateway":
        """Factory method to create AIGateway with default collaborators.

        Resolves the API key through the secret accessor. A missing key
        leaves AI features disabled rather than failing startup.

        Args:
            settings: Application settings. If None, uses get_settings().
            secrets: Secret accessor. If None, built from settings (Key Vault when configured).
            store: Response cache. If None, builds a MemoryResponseStore from settings.
            client: Completion client. If None, builds an AzureOpenAIClient.

        Returns:
            Configured AIGateway instance
        """
        settings = settings or get_settings()

        if client is None:
            secrets = secrets or SecretAccessor.create(settings)
            api_key = secrets.get_secret(API_KEY_SECRET, API_KEY_ENV)
            if api_key:
                logger.info("Azure OpenAI client initialized")
            else:
                logger.warning("Azure OpenAI API key not configured, AI features disabled")
            client = AzureOpenAIClient.create(settings, api_key=api_key)
            configured = client.is_configured
        else:
            configured = True

        return cls(
            store=store if store is not None else MemoryResponseStore.create(settings),
            client=client,
            settings=settings,
            configured=configured,
        )

    def build_query(
        self,
        prompt: str,
        mode: str | Mode = Mode.CHAT,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> AIQuery:
        """Validate inputs into an AIQuery.

        Raises:
            InvalidInput: If the prompt is empty or not text, or the mode is unknown
        """
        if not isinstance(prompt, str) or not prompt.strip():
            raise InvalidInput("Invalid prompt")

        return AIQuery(
            prompt=prompt,
            mode=Mode.parse(mode),
            temperature=temperature,
            max_tokens=max_tokens,
            top_p=top_p,
        )

    async def query(
        self,
        prompt: str,
        mode: str | Mode = Mode.CHAT,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> AIResponse:
        """Answer a prompt, from the cache when possible.

        Business logic:
        1. Validate the prompt and mode
        2. Return the cached response if one is live (no lifetime refresh)
        3. Otherwise call the model with the mode's system instruction
        4. Cache and return the completion

        Args:
            prompt: The user prompt
            mode: One of the Mode values
            temperature: Override the default sampling temperature
            max_tokens: Override the mode's output budget
            top_p: Override the default nucleus sampling value

        Returns:
            AIResponse with ``cached`` set on hits

        Raises:
            InvalidInput: Empty prompt or unknown mode
            AIServiceError: The model call failed (see ErrorKind)
        """
        request = self.build_query(
            prompt, mode, temperature=temperature, max_tokens=max_tokens, top_p=top_p
        )
        key = request.cache_key

        cached = self._store.get(key)
        if cached is not None:
            logger.debug(
                "AI cache hit",
                extra={"mode": request.mode.value, "prompt_length": len(request.prompt)},
            )
            return AIResponse(text=cached, mode=request.mode, cached=True)

        profile = get_profile(request.mode)
        messages = [
            {"role": "system", "content": profile.system_template},
            {"role": "user", "content": request.prompt},
        ]

        start_time = time.time()
        try:
            result = await self._client.complete(
                messages,
                max_tokens=self._resolve_max_tokens(request, profile.max_tokens),
                temperature=(
                    request.temperature
                    if request.temperature is not None
                    else self._settings.default_temperature
                ),
                top_p=request.top_p if request.top_p is not None else self._settings.default_top_p,
            )
        except AIServiceError as e:
            logger.error(
                "AI request failed",
                extra={
                    "mode": request.mode.value,
                    "duration_ms": round((time.time() - start_time) * 1000, 1),
                    "error_kind": e.kind.value,
                    "status": e.status_code,
                    "prompt_preview": preview(request.prompt, 40),
                },
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        self._store.set(key, result.text)

        response = AIResponse(
            text=result.text,
            mode=request.mode,
            cached=False,
            token_usage=result.usage,
        )
        logger.info(
            "AI request completed",
            extra={
                "mode": request.mode.value,
                "duration_ms": round(duration_ms, 1),
                "prompt_length": len(request.prompt),
                "response_length": len(result.text),
                "tokens": response.total_tokens,
            },
        )
        return response

    def _resolve_max_tokens(self, request: AIQuery, profile_max_tokens: int | None) -> int:
        if request.max_tokens is not None:
            return request.max_tokens
        if profile_max_tokens is not None:
            return profile_max_tokens
        return self._settings.default_max_tokens

    def clear_cache(self) -> None:
        """Drop every cached response."""
        self._store.clear()
        logger.info("AI cache cleared")

    def cache_stats(self) -> CacheStats:
        """Get cache statistics.

        Returns:
            CacheStats with the current size, capacity and TTL in minutes
            (rounded up, so a sub-minute TTL reports 1)
        """
        return CacheStats(
            size=len(self._store),
            capacity=self._store.capacity,
            ttl_minutes=math.ceil(self._store.ttl_seconds / 60),
        )

    async def aclose(self) -> None:
        """Close the completion client."""
        await self._client.aclose()

    @property
    def is_configured(self) -> bool:
        """Whether AI features are enabled (an API key was found)."""
        return self._configured

    @property
    def store(self) -> ResponseStore:
        """Get the underlying response store (for testing)."""
        return self._store

    @property
    def client(self) -> CompletionClient:
        """Get the underlying completion client (for testing)."""
        return self._client
