"""Shared fixtures for counsel_ai tests."""

import pytest

from counsel_ai.config import Settings
from counsel_ai.protocols import CompletionResult
from counsel_ai.repositories import MemoryResponseStore
from counsel_ai.services import AIGateway


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCompletionClient:
    """CompletionClient that records calls and returns canned output."""

    def __init__(self, text: str = "You can book from the Appointments page.", usage=None, error=None):
        self.text = text
        self.usage = usage if usage is not None else {"prompt_tokens": 12, "completion_tokens": 8, "total_tokens": 20}
        self.error = error
        self.calls: list[dict] = []
        self.closed = False

    async def complete(self, messages, *, max_tokens, temperature, top_p):
        self.calls.append(
            {
                "messages": messages,
                "max_tokens": max_tokens,
                "temperature": temperature,
                "top_p": top_p,
            }
        )
        if self.error is not None:
            raise self.error
        return CompletionResult(text=self.text, usage=self.usage)

    async def aclose(self) -> None:
        self.closed = True


class RecordingInteractionLog:
    def __init__(self) -> None:
        self.records = []

    def record(self, interaction) -> None:
        self.records.append(interaction)


@pytest.fixture
def settings():
    """Settings independent of the developer's environment."""
    return Settings(
        openai_endpoint="https://example.openai.azure.com",
        openai_deployment="gpt-4",
        openai_api_version="2023-05-15",
        cache_ttl_minutes=10,
        cache_max_entries=100,
        default_temperature=0.7,
        default_max_tokens=500,
        default_top_p=0.95,
        request_timeout=30.0,
        key_vault_name="",
        ai_rate_limit_max_requests=20,
        ai_rate_limit_window_minutes=15,
        log_level="debug",
        log_format="text",
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return MemoryResponseStore(capacity=100, ttl_seconds=600, timer=clock)


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def gateway(store, fake_client, settings):
    return AIGateway(store=store, client=fake_client, settings=settings)


@pytest.fixture
def interaction_log():
    return RecordingInteractionLog()
