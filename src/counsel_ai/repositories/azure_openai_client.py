"""Azure OpenAI chat completion client.

Talks to an Azure OpenAI deployment over its REST API:

    POST {endpoint}/openai/deployments/{deployment}/chat/completions?api-version={version}

Key features:
- Single request per call, no automatic retries
- Hard timeout (30 seconds by default)
- Transport, status and body errors translated into the AIServiceError taxonomy
- Async support for concurrent requests
"""

import logging
from typing import Any

import httpx

from counsel_ai.config import Settings, get_settings
from counsel_ai.exceptions import (
    AuthenticationFailed,
    RateLimited,
    RequestTimeout,
    ServiceUnavailable,
)
from counsel_ai.protocols import CompletionResult

logger = logging.getLogger(__name__)


class AzureOpenAIClient:
    """Azure OpenAI implementation of the CompletionClient protocol.

    This class satisfies the CompletionClient protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        client = AzureOpenAIClient.create(settings, api_key="...")
        result = await client.complete(
            [{"role": "user", "content": "Hello"}],
            max_tokens=500,
            temperature=0.7,
            top_p=0.95,
        )
        print(result.text)
        ```
    """

    def __init__(
        self,
        endpoint: str,
        deployment: str,
        api_version: str,
        api_key: str | None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            endpoint: Resource endpoint, e.g. https://my-resource.openai.azure.com
            deployment: Deployment (model) name
            api_version: Azure OpenAI API version string
            api_key: API key, or None when AI features are disabled
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._endpoint = endpoint.rstrip("/")
        self._deployment = deployment
        self._api_version = api_version
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "AzureOpenAIClient":
        """Factory method to create the client from settings.

        Args:
            settings: Application settings. If None, uses get_settings().
            api_key: Resolved API key.
            transport: Optional httpx transport.

        Returns:
            Configured AzureOpenAIClient
        """
        settings = settings or get_settings()
        return cls(
            endpoint=settings.openai_endpoint,
            deployment=settings.openai_deployment,
            api_version=settings.openai_api_version,
            api_key=api_key,
            timeout=settings.request_timeout,
            transport=transport,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key) and bool(self._endpoint)

    @property
    def url(self) -> str:
        return (
            f"{self._endpoint}/openai/deployments/{self._deployment}"
            f"/chat/completions?api-version={self._api_version}"
        )

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        max_tokens: int,
        temperature: float,
        top_p: float,
    ) -> CompletionResult:
        """Send one chat completion request.

        Raises:
            ServiceUnavailable: Not configured, network failure, unexpected status or bad body
            AuthenticationFailed: HTTP 401
            RateLimited: HTTP 429
            RequestTimeout: The request exceeded the timeout
        """
        if not self.is_configured:
            raise ServiceUnavailable("AI service not configured")

        payload = {
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "top_p": top_p,
            "frequency_penalty": 0,
            "presence_penalty": 0,
        }
        headers = {"Content-Type": "application/json", "api-key": self._api_key or ""}

        try:
            response = await self.client.post(self.url, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise RequestTimeout() from e
        except httpx.HTTPStatusError as e:
            raise self._translate_status(e.response) from e
        except httpx.HTTPError as e:
            raise ServiceUnavailable() from e

        return self._parse_body(response)

    @staticmethod
    def _translate_status(response: httpx.Response) -> Exception:
        status = response.status_code
        if status == 401:
            return AuthenticationFailed(status_code=status)
        if status == 429:
            return RateLimited(status_code=status)
        logger.warning("AI endpoint returned unexpected status", extra={"status": status})
        return ServiceUnavailable(status_code=status)

    @staticmethod
    def _parse_body(response: httpx.Response) -> CompletionResult:
        try:
            data: dict[str, Any] = response.json()
            text = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ServiceUnavailable("AI service returned a malformed response") from e

        if not isinstance(text, str):
            raise ServiceUnavailable("AI service returned a malformed response")

        usage = data.get("usage")
        return CompletionResult(text=text, usage=usage if isinstance(usage, dict) else None)

    async def aclose(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
