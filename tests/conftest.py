"""Pytest configuration and shared fixtures."""

import pytest

from topic_router.domain.subscriber_port import SubscriberPort
from topic_router.infrastructure.in_memory_broker import InMemoryBroker


class RecordingSubscriber(SubscriberPort):
    """Test subscriber that records every payload it receives."""

    def __init__(self, name: str = "") -> None:
        super().__init__()
        self.name = name
        self.messages: list[bytes] = []

    def receive(self, payload: bytes) -> None:
        self.messages.append(payload)


@pytest.fixture
def broker() -> InMemoryBroker:
    """Create a broker without match caching."""
    return InMemoryBroker(use_cache=False)


@pytest.fixture
def cached_broker() -> InMemoryBroker:
    """Create a broker with match caching."""
    return InMemoryBroker(use_cache=True)


@pytest.fixture(params=[False, True], ids=["uncached", "cached"])
def any_broker(request: pytest.FixtureRequest) -> InMemoryBroker:
    """Create a broker, once without and once with match caching."""
    return InMemoryBroker(use_cache=request.param)


@pytest.fixture
def subscriber() -> RecordingSubscriber:
    """Create a recording subscriber."""
    return RecordingSubscriber("subscriber")
