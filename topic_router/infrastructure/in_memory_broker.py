import logging
from collections.abc import Iterable
from typing import Any

from topic_router.domain.broker_port import BrokerPort
from topic_router.domain.config import BrokerConfig
from topic_router.domain.subscriber_port import SubscriberPort
from topic_router.domain.subscription import Subscription
from topic_router.utils.topic_matcher import (
    MULTI_LEVEL_WILDCARD,
    SINGLE_LEVEL_WILDCARD,
    split_topic,
    validate_topic_filter,
    validate_topic_name,
)

from .match_cache import MatchCache
from .topic_trie import TopicNode, TopicTrie

logger = logging.getLogger(__name__)


class InMemoryBroker(BrokerPort):
    """
    An in-process, synchronous implementation of the BrokerPort.
    Subscriptions live in a TopicTrie; publishes walk it under wildcard rules.

    Not internally synchronized: guard a shared instance with one lock, or use
    ThreadSafeBroker.

    Example:
        broker = InMemoryBroker(use_cache=True)
        broker.subscribe(subscriber, "finance/+/ibm")
        broker.publish("finance/stock/ibm", b"128.5")
    """

    def __init__(self, use_cache: bool = False, config: BrokerConfig | None = None) -> None:
        """
        Initialize the broker.

        Args:
            use_cache: Memoize match results per exact topic. Ignored when `config` is given.
            config: Full broker configuration.
        """
        self.config = config if config is not None else BrokerConfig(use_cache=use_cache)
        self.trie = TopicTrie()
        self.cache = MatchCache()

    @property
    def use_cache(self) -> bool:
        return self.config.use_cache

    def subscribe(self, subscriber: SubscriberPort, topic: str) -> Subscription:
        """
        Subscribe a subscriber to a topic filter.

        Args:
            subscriber: The subscriber to notify on matching publishes.
            topic: Topic filter, split on `/` with no normalization.

        Returns:
            The stored subscription.

        Raises:
            InvalidTopicError: In strict mode, if `#` is not the last segment.
        """
        if self.config.strict_topics:
            validate_topic_filter(topic)

        subscription = Subscription(subscriber=subscriber, topic=topic)
        logger.info(
            f"Subscribing {subscriber} to '{topic}' "
            f"(subscription {subscription.subscription_id})"
        )

        self._invalidate_cache()
        segments = split_topic(topic)
        self.trie.ensure_path(segments)
        self.trie.insert_subscription(segments, subscription)
        return subscription

    def unsubscribe(self, subscriber: SubscriberPort, topics: Iterable[str]) -> int:
        """
        Remove the subscriber's subscriptions made with one of the given topics.

        Topics are compared as plain strings: unsubscribing from `foo/+` removes
        a subscription made with `foo/+`, not one made with `foo/bar`.

        Args:
            subscriber: The subscriber whose subscriptions are removed.
            topics: Topic filters, exactly as they were subscribed. A single
                string is treated as one topic, not as a sequence of characters.

        Returns:
            Number of subscriptions removed.
        """
        if isinstance(topics, str):
            topics = [topics]
        wanted = set(topics)
        self._invalidate_cache()
        removed = self.trie.remove_subscriptions(
            lambda s: s.belongs_to(subscriber) and s.topic in wanted
        )
        self._after_removal()

        logger.info(f"Unsubscribed {subscriber} from {sorted(wanted)} ({removed} removed)")
        return removed

    def unsubscribe_all(self, subscriber: SubscriberPort) -> int:
        """
        Remove every subscription of the subscriber, whatever its topic.

        Returns:
            Number of subscriptions removed.
        """
        self._invalidate_cache()
        removed = self.trie.remove_subscriptions(lambda s: s.belongs_to(subscriber))
        self._after_removal()

        logger.info(f"Unsubscribed {subscriber} from all topics ({removed} removed)")
        return removed

    def publish(self, topic: str, payload: bytes) -> int:
        """
        Deliver a payload to every subscription matching the topic.

        Delivery is a direct call to `receive` on each matched subscriber, in
        match order. An exception raised by a subscriber propagates and stops
        the remaining deliveries of this publish.

        Args:
            topic: Topic name to publish to.
            payload: Opaque payload bytes.

        Returns:
            Number of deliveries made.

        Raises:
            InvalidTopicError: In strict mode, if the topic contains a wildcard segment.
        """
        subscribers = self.match(topic)
        for subscriber in subscribers:
            subscriber.receive(payload)

        logger.debug(f"Published to '{topic}': {len(subscribers)} deliveries")
        return len(subscribers)

    def match(self, topic: str) -> list[SubscriberPort]:
        """
        Compute the subscribers a publish of `topic` would reach, without delivering.

        A subscriber appears once per matching subscription. When caching is
        enabled the result is served from, or stored into, the match cache.

        Raises:
            InvalidTopicError: In strict mode, if the topic contains a wildcard segment.
        """
        if self.config.strict_topics:
            validate_topic_name(topic)

        if self.use_cache:
            cached = self.cache.get(topic)
            if cached is not None:
                logger.debug(f"Match cache hit for '{topic}'")
                return list(cached)

        matched: list[SubscriberPort] = []
        self._collect(self.trie.root, split_topic(topic), 0, matched)

        if self.use_cache:
            self.cache.store(topic, matched)
        return matched

    def _collect(
        self,
        node: TopicNode,
        segments: list[str],
        index: int,
        matched: list[SubscriberPort],
    ) -> None:
        if index >= len(segments):
            return

        segment = segments[index]
        is_last = index == len(segments) - 1

        for key in self._candidate_keys(segment):
            child = node.children.get(key)
            if child is None:
                continue

            # `#` consumes everything that is left.
            if is_last or key == MULTI_LEVEL_WILDCARD:
                matched.extend(s.subscriber for s in child.subscriptions)

            # so that "finance/#" matches "finance"
            if is_last:
                tail = child.children.get(MULTI_LEVEL_WILDCARD)
                if tail is not None:
                    matched.extend(s.subscriber for s in tail.subscriptions)

            if key != MULTI_LEVEL_WILDCARD:
                self._collect(child, segments, index + 1, matched)

    @staticmethod
    def _candidate_keys(segment: str) -> list[str]:
        # A published segment that is itself "#" or "+" must not visit that child twice.
        keys = [segment]
        for wildcard in (MULTI_LEVEL_WILDCARD, SINGLE_LEVEL_WILDCARD):
            if wildcard != segment:
                keys.append(wildcard)
        return keys

    def get_topics(self) -> set[str]:
        """
        Returns all topic filters that currently have at least one subscription.

        Returns:
            Set of topic filters.
        """
        return {subscription.topic for subscription in self.trie.iter_subscriptions()}

    def get_stats(self) -> dict[str, Any]:
        """
        Get broker statistics.

        Returns:
            Dictionary with statistics.
        """
        subscriptions = list(self.trie.iter_subscriptions())
        return {
            "total_subscriptions": len(subscriptions),
            "total_subscribers": len({s.subscriber.subscriber_id for s in subscriptions}),
            "total_nodes": self.trie.node_count(),
            "use_cache": self.use_cache,
            "cached_topics": len(self.cache),
            "cache_hits": self.cache.hits,
            "cache_misses": self.cache.misses,
        }

    def _invalidate_cache(self) -> None:
        if self.use_cache:
            self.cache.invalidate()

    def _after_removal(self) -> None:
        if self.config.prune_empty_nodes:
            self.trie.prune()
