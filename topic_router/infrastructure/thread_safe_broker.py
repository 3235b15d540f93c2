"""Lock-guarded broker that delivers outside the lock."""

import logging
import threading
from collections.abc import Iterable
from typing import Any

from topic_router.domain.broker_port import BrokerPort
from topic_router.domain.config import BrokerConfig
from topic_router.domain.subscriber_port import SubscriberPort
from topic_router.domain.subscription import Subscription

from .in_memory_broker import InMemoryBroker

logger = logging.getLogger(__name__)


class ThreadSafeBroker(BrokerPort):
    """
    Wraps an InMemoryBroker behind a single lock so it can be shared between threads.

    `publish` resolves the matching subscribers while holding the lock (this
    may write to the match cache) and calls them after releasing it. A slow
    subscriber therefore does not block other threads, and a subscriber may
    subscribe, unsubscribe or publish from inside `receive` without deadlocking.
    Deliveries always go to the subscribers that matched at the time the lock
    was held, even if they unsubscribe concurrently.
    """

    def __init__(
        self,
        use_cache: bool = False,
        config: BrokerConfig | None = None,
        broker: InMemoryBroker | None = None,
    ) -> None:
        """
        Args:
            use_cache: Memoize match results per exact topic. Ignored when `config` or `broker` is given.
            config: Configuration for the wrapped broker. Ignored when `broker` is given.
            broker: An existing broker to wrap. It must not be used directly afterwards.
        """
        self._broker = broker if broker is not None else InMemoryBroker(use_cache, config)
        self._lock = threading.Lock()

    @property
    def config(self) -> BrokerConfig:
        return self._broker.config

    def subscribe(self, subscriber: SubscriberPort, topic: str) -> Subscription:
        with self._lock:
            return self._broker.subscribe(subscriber, topic)

    def unsubscribe(self, subscriber: SubscriberPort, topics: Iterable[str]) -> int:
        topics = [topics] if isinstance(topics, str) else list(topics)
        with self._lock:
            return self._broker.unsubscribe(subscriber, topics)

    def unsubscribe_all(self, subscriber: SubscriberPort) -> int:
        with self._lock:
            return self._broker.unsubscribe_all(subscriber)

    def publish(self, topic: str, payload: bytes) -> int:
        with self._lock:
            subscribers = self._broker.match(topic)

        for subscriber in subscribers:
            subscriber.receive(payload)

        logger.debug(f"Published to '{topic}': {len(subscribers)} deliveries")
        return len(subscribers)

    def match(self, topic: str) -> list[SubscriberPort]:
        with self._lock:
            return self._broker.match(topic)

    def get_topics(self) -> set[str]:
        with self._lock:
            return self._broker.get_topics()

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            return self._broker.get_stats()
