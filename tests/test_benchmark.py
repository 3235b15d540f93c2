"""
Performance benchmark tests for the topic router.

Run with:
    uv run pytest tests/test_benchmark.py -v
    uv run pytest tests/test_benchmark.py -v --benchmark-only
    uv run pytest tests/test_benchmark.py -v --benchmark-compare
"""

from typing import Any

import pytest

from topic_router.infrastructure.in_memory_broker import InMemoryBroker
from tests.conftest import RecordingSubscriber

# Mark all tests in this module as benchmark tests
pytestmark = pytest.mark.benchmark


def build_broker(use_cache: bool) -> InMemoryBroker:
    """
    Broker with 1000 subscriptions: 10 regions x 10 sensors x 10 metrics,
    plus a handful of wildcard subscribers.
    """
    broker = InMemoryBroker(use_cache=use_cache)
    for region in range(10):
        for sensor in range(10):
            for metric in range(10):
                broker.subscribe(
                    RecordingSubscriber(), f"site/r{region}/s{sensor}/m{metric}"
                )
    broker.subscribe(RecordingSubscriber("all"), "#")
    broker.subscribe(RecordingSubscriber("region"), "site/r3/#")
    broker.subscribe(RecordingSubscriber("metric"), "site/+/+/m7")
    return broker


class TestTopicRouterBenchmark:
    """Benchmark tests for publish throughput."""

    @pytest.mark.parametrize("use_cache", [False, True], ids=["uncached", "cached"])
    def test_benchmark_repeated_publish(self, benchmark: Any, use_cache: bool) -> None:
        """
        Publish the same 100 topics repeatedly; the cached broker should only
        walk the trie on the first round.
        """
        broker = build_broker(use_cache)
        topics = [f"site/r{n % 10}/s{n // 10}/m7" for n in range(100)]

        def publish_round() -> int:
            return sum(broker.publish(topic, b"42") for topic in topics)

        deliveries = benchmark(publish_round)

        # exact + "#" + "site/+/+/m7", plus "site/r3/#" for the r3 topics
        assert deliveries == 100 * 3 + 10

    def test_benchmark_subscribe_churn(self, benchmark: Any) -> None:
        """Subscribe and unsubscribe a subscriber against a populated trie."""
        broker = build_broker(use_cache=True)
        subscriber = RecordingSubscriber("churn")

        def churn() -> int:
            for n in range(50):
                broker.subscribe(subscriber, f"site/r{n % 10}/+/m{n % 7}")
            return broker.unsubscribe_all(subscriber)

        assert benchmark(churn) == 50
