"""
Tests for the HTTP API.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import FakeCompletionClient
from counsel_ai.api.app import create_app
from counsel_ai.api.rate_limit import AIRateLimiter, MemoryRateLimiterBackend
from counsel_ai.exceptions import AuthenticationFailed, RateLimited
from counsel_ai.repositories import MemoryResponseStore
from counsel_ai.secret_accessor import SecretAccessor
from counsel_ai.services import AIGateway


def build_client(settings, interaction_log, text="Use the Book button.", error=None, rate_limiter=None):
    fake = FakeCompletionClient(text=text, error=error)
    gateway = AIGateway(
        store=MemoryResponseStore(capacity=10, ttl_seconds=600),
        client=fake,
        settings=settings,
    )
    app = create_app(
        settings=settings,
        gateway=gateway,
        interaction_log=interaction_log,
        rate_limiter=rate_limiter,
    )
    return TestClient(app), fake


@pytest.fixture
def client(settings, interaction_log):
    """Create a test client backed by a fake model."""
    test_client, _ = build_client(settings, interaction_log)
    with test_client:
        yield test_client


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["status"] == "healthy"
    for field in ("service", "timestamp", "uptime", "ai_configured"):
        assert field in body["data"]
    assert "timestamp" in body


def test_ai_query_then_cached(client, interaction_log):
    """Second identical query is served from the cache."""
    payload = {"prompt": "How do I book an appointment?", "mode": "chat"}

    first = client.post("/api/ai/query", json=payload)
    second = client.post("/api/ai/query", json=payload)

    assert first.status_code == 200
    body = first.json()
    assert body["success"] is True
    assert body["message"] == "AI query successful"
    assert body["data"] == {"response": "Use the Book button.", "mode": "chat", "cached": False}
    assert second.json()["data"]["cached"] is True
    assert [r.cached for r in interaction_log.records] == [False, True]


def test_ai_query_defaults_to_chat(client):
    response = client.post("/api/ai/query", json={"prompt": "Hello there"})
    assert response.status_code == 200
    assert response.json()["data"]["mode"] == "chat"


@pytest.mark.parametrize(
    "payload",
    [
        {"prompt": "hi", "mode": "chat"},
        {"prompt": "     ", "mode": "chat"},
        {"prompt": "How do I book?", "mode": "poetry"},
        {"mode": "chat"},
    ],
)
def test_ai_query_validation(client, payload):
    response = client.post("/api/ai/query", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"]["message"] == "Validation failed"
    assert body["error"]["code"] == 400
    assert body["error"]["details"]


@pytest.mark.parametrize("error", [RateLimited(status_code=429), AuthenticationFailed(status_code=401)])
def test_ai_failure_maps_to_503(settings, interaction_log, error):
    test_client, _ = build_client(settings, interaction_log, error=error)

    with test_client:
        response = test_client.post("/api/ai/query", json={"prompt": "How do I book?", "mode": "chat"})

    assert response.status_code == 503
    body = response.json()
    assert body["success"] is False
    assert body["error"]["kind"] == error.kind.value
    assert body["error"]["message"] == error.message


def test_unconfigured_ai_maps_to_503(settings, interaction_log):
    gateway = AIGateway.create(settings, secrets=SecretAccessor(environ={}))
    app = create_app(settings=settings, gateway=gateway, interaction_log=interaction_log)

    with TestClient(app) as test_client:
        health = test_client.get("/api/health").json()
        response = test_client.post("/api/ai/query", json={"prompt": "How do I book?"})

    assert health["data"]["ai_configured"] is False
    assert response.status_code == 503
    assert response.json()["error"]["kind"] == "service_unavailable"


def test_cache_stats_and_clear(client):
    client.post("/api/ai/query", json={"prompt": "How do I book an appointment?"})

    stats = client.get("/api/ai/cache/stats").json()
    assert stats["data"] == {"size": 1, "capacity": 10, "ttl": 10}

    cleared = client.delete("/api/ai/cache")
    assert cleared.status_code == 200
    assert cleared.json()["data"]["size"] == 0

    again = client.post("/api/ai/query", json={"prompt": "How do I book an appointment?"})
    assert again.json()["data"]["cached"] is False


def test_feedback_analyze(settings, interaction_log):
    text = '```json\n{"rating":5,"sentiment":"positive","summary":"Positive feedback on planning help."}\n```'
    test_client, _ = build_client(settings, interaction_log, text=text)

    with test_client:
        response = test_client.post(
            "/api/feedback/analyze",
            json={"feedback": "Great session, really helped me plan my semester!"},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Feedback analyzed successfully"
    assert body["data"] == {
        "rating": 5,
        "sentiment": "positive",
        "summary": "Positive feedback on planning help.",
        "improvementSuggestions": None,
        "aiAnalyzed": True,
    }


def test_feedback_analyze_falls_back_when_model_is_down(settings, interaction_log):
    test_client, _ = build_client(settings, interaction_log, error=RateLimited(status_code=429))

    with test_client:
        response = test_client.post(
            "/api/feedback/analyze",
            json={"feedback": "Great session, really helped me plan my semester!"},
        )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["rating"] == 3
    assert data["sentiment"] == "neutral"
    assert data["summary"] == "Thank you for your feedback."
    assert data["aiAnalyzed"] is False


def test_feedback_too_short(client):
    response = client.post("/api/feedback/analyze", json={"feedback": "ok"})
    assert response.status_code == 400


def test_feedback_summarize(settings, interaction_log):
    test_client, fake = build_client(settings, interaction_log, text="Students value punctuality.")

    with test_client:
        response = test_client.post(
            "/api/feedback/summarize",
            json={"feedback": ["Great session", "Counselor was late"]},
        )

    assert response.status_code == 200
    assert response.json()["data"] == {"summary": "Students value punctuality.", "count": 2}
    assert fake.calls[0]["messages"][0]["content"].startswith("You are an AI assistant that summarizes")


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nonexistent")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_shutdown_closes_model_client(settings, interaction_log):
    test_client, fake = build_client(settings, interaction_log)

    with test_client:
        pass

    assert fake.closed is True


def test_ai_query_rate_limit(settings, interaction_log, clock):
    limiter = AIRateLimiter(max_requests=2, window_seconds=900, backend=MemoryRateLimiterBackend(timer=clock))
    test_client, fake = build_client(settings, interaction_log, rate_limiter=limiter)
    payload = {"prompt": "How do I book an appointment?"}

    with test_client:
        responses = [test_client.post("/api/ai/query", json=payload) for _ in range(3)]

    assert [r.status_code for r in responses] == [200, 200, 429]
    body = responses[2].json()
    assert body["success"] is False
    assert body["error"] == {"message": "Too many AI requests, please try again later", "code": 429}
    assert responses[2].headers["Retry-After"] == "900"
    assert len(fake.calls) == 1


def test_ai_query_rate_limit_resets_after_window(settings, interaction_log, clock):
    limiter = AIRateLimiter(max_requests=1, window_seconds=900, backend=MemoryRateLimiterBackend(timer=clock))
    test_client, _ = build_client(settings, interaction_log, rate_limiter=limiter)
    payload = {"prompt": "How do I book an appointment?"}

    with test_client:
        first = test_client.post("/api/ai/query", json=payload)
        limited = test_client.post("/api/ai/query", json=payload)
        clock.advance(900)
        after_window = test_client.post("/api/ai/query", json=payload)

    assert (first.status_code, limited.status_code, after_window.status_code) == (200, 429, 200)


def test_ai_query_rate_limit_is_per_client(settings, interaction_log, clock):
    limiter = AIRateLimiter(max_requests=1, window_seconds=900, backend=MemoryRateLimiterBackend(timer=clock))
    test_client, _ = build_client(settings, interaction_log, rate_limiter=limiter)
    payload = {"prompt": "How do I book an appointment?"}

    with test_client:
        a = test_client.post("/api/ai/query", json=payload, headers={"X-Forwarded-For": "10.0.0.1"})
        b = test_client.post("/api/ai/query", json=payload, headers={"X-Forwarded-For": "10.0.0.2"})
        a_again = test_client.post("/api/ai/query", json=payload, headers={"X-Forwarded-For": "10.0.0.1"})

    assert (a.status_code, b.status_code, a_again.status_code) == (200, 200, 429)


def test_other_routes_are_not_rate_limited(settings, interaction_log, clock):
    limiter = AIRateLimiter(max_requests=1, window_seconds=900, backend=MemoryRateLimiterBackend(timer=clock))
    test_client, _ = build_client(settings, interaction_log, rate_limiter=limiter)

    with test_client:
        statuses = [test_client.get("/api/ai/cache/stats").status_code for _ in range(3)]

    assert statuses == [200, 200, 200]
