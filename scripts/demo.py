#!/usr/bin/env python3
"""
Demo script for the AI gateway and feedback analyzer.

Runs a few queries against the configured Azure OpenAI deployment to show
cache hits, then analyzes sample feedback. Requires AZURE_OPENAI_ENDPOINT
and AZURE_OPENAI_API_KEY (or a .env file).
"""

import asyncio
import time

from counsel_ai import AIGateway, AIServiceError, FeedbackAnalyzer, get_settings
from counsel_ai.logging_config import configure_logging


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_cached_queries(gateway: AIGateway) -> None:
    """Demonstrate cache misses followed by hits."""
    print_section("Cached Queries")

    queries = [
        ("How do I book an appointment?", "chat"),
        ("  how do I book an APPOINTMENT?", "chat"),
        ("I have exams next week and can't sleep", "wellbeing_tips"),
        ("I want to talk to someone about choosing a major", "recommendation"),
        ("I want to talk to someone about choosing a major", "recommendation"),
    ]

    for prompt, mode in queries:
        start_time = time.time()
        try:
            result = await gateway.query(prompt, mode)
        except AIServiceError as e:
            print(f"  ✗ [{mode}] {prompt[:40]!r}: {e.kind.value} - {e.message}")
            continue
        elapsed_ms = (time.time() - start_time) * 1000
        marker = "HIT " if result.cached else "MISS"
        print(f"  {marker} [{mode}] {prompt[:40]!r} ({elapsed_ms:.0f}ms)")
        print(f"       {result.text[:100]}...")

    stats = gateway.cache_stats()
    print(f"\n📊 Cache: {stats.size}/{stats.capacity} entries, TTL {stats.ttl_minutes} min")


async def demo_feedback_analysis(analyzer: FeedbackAnalyzer) -> None:
    """Demonstrate structured feedback analysis."""
    print_section("Feedback Analysis")

    samples = [
        "Great session, really helped me plan my semester!",
        "The counselor was 20 minutes late and seemed distracted.",
        "It was fine. We talked about my schedule.",
    ]

    for feedback in samples:
        analysis = await analyzer.analyze(feedback)
        source = "AI" if analysis.ai_analyzed else "fallback"
        print(f"\n📝 {feedback}")
        print(f"   rating={analysis.rating} sentiment={analysis.sentiment} ({source})")
        print(f"   summary: {analysis.summary}")
        if analysis.improvement_suggestions:
            print(f"   suggestions: {analysis.improvement_suggestions}")

    summary = await analyzer.summarize(samples)
    print(f"\n🧾 Summary of all feedback: {summary or 'unavailable'}")


async def main() -> None:
    settings = get_settings()
    configure_logging("warning", "text")

    gateway = AIGateway.create(settings)
    if not gateway.is_configured:
        print("⚠️  AZURE_OPENAI_API_KEY / AZURE_OPENAI_ENDPOINT not set; every miss will fail.")

    try:
        await demo_cached_queries(gateway)
        await demo_feedback_analysis(FeedbackAnalyzer(gateway=gateway))
    finally:
        await gateway.aclose()


if __name__ == "__main__":
    asyncio.run(main())
