"""Tests for wildcard matching through the broker's trie walk."""

import itertools

import pytest

from topic_router.infrastructure.in_memory_broker import InMemoryBroker
from topic_router.utils.topic_matcher import match_topic_pattern
from tests.conftest import RecordingSubscriber


def matches(pub_topic: str, sub_topic: str) -> bool:
    broker = InMemoryBroker(use_cache=False)
    subscriber = RecordingSubscriber()
    broker.subscribe(subscriber, sub_topic)
    broker.publish(pub_topic, bytes([0, 1, 2]))
    return len(subscriber.messages) == 1


class TestWildcardMatching:
    """Test single-subscription wildcard semantics."""

    @pytest.mark.parametrize(
        ("pub_topic", "sub_topic", "expected"),
        [
            ("foo/bar/baz", "foo/bar/baz", True),
            ("foo/bar", "foo/+", True),
            ("foo/baz", "foo/+", True),
            ("foo/bar/baz", "foo/+", False),
            ("foo/bar", "foo/#", True),
            ("foo/bar/baz", "foo/#", True),
            ("foo/bar/baz/boo", "foo/#", True),
            ("foo/bla/bar/baz/boo/bogadog", "foo/+/bar/baz/#", True),
            ("finance", "finance/#", True),
            ("finance", "finance#", False),
            ("finance", "#", True),
            ("finance/stock", "#", True),
            ("finance/stock", "finance/stock/ibm", False),
            ("topics/foo/bar", "topics/foo/#", True),
            ("topics/bar/baz/boo", "topics/foo/#", False),
            ("foo", "+", True),
            ("foo/bar", "+", False),
            ("foo", "foo/+", False),
            ("foo/bar", "+/bar", True),
            ("foo", "+/#", True),
            ("foo", "finance/#", False),
            ("fin+", "fin+", True),
            ("finance", "fin+", False),
        ],
    )
    def test_matches(self, pub_topic: str, sub_topic: str, expected: bool) -> None:
        """Test whether a single subscription receives a single publish."""
        assert matches(pub_topic, sub_topic) is expected

    def test_multi_level_wildcard_delivers_once(self) -> None:
        """Test that `finance/#` delivers once for the bare prefix and for deeper topics."""
        broker = InMemoryBroker()
        subscriber = RecordingSubscriber()
        broker.subscribe(subscriber, "finance/#")

        assert broker.publish("finance", b"a") == 1
        assert broker.publish("finance/stock", b"b") == 1
        assert broker.publish("finance/stock/ibm", b"c") == 1

    def test_wildcard_segment_in_published_topic(self) -> None:
        """Test that a published `+` or `#` segment visits each child only once."""
        broker = InMemoryBroker()
        plus = RecordingSubscriber("plus")
        hash_ = RecordingSubscriber("hash")
        broker.subscribe(plus, "a/+")
        broker.subscribe(hash_, "a/#")

        assert broker.publish("a/+", b"x") == 2
        assert broker.publish("a/#", b"y") == 2
        assert plus.messages == [b"x", b"y"]
        assert hash_.messages == [b"x", b"y"]


@pytest.mark.integration
class TestSubscribeWildcards:
    """Test several wildcard subscribers sharing one broker."""

    def test_subscribe_wildcards(self, any_broker: InMemoryBroker) -> None:
        """Test the end-to-end wildcard scenario with four subscribers."""
        subscriber1 = RecordingSubscriber("1")
        subscriber2 = RecordingSubscriber("2")
        subscriber3 = RecordingSubscriber("3")
        subscriber4 = RecordingSubscriber("4")

        any_broker.subscribe(subscriber1, "topics/foo/+")
        any_broker.publish("topics/foo/bar", bytes([3]))
        any_broker.publish("topics/bar/baz/boo", bytes([4]))
        assert subscriber1.messages == [bytes([3])]

        any_broker.subscribe(subscriber2, "topics/foo/#")
        any_broker.publish("topics/foo/bar", bytes([3]))
        any_broker.publish("topics/bar/baz/boo", bytes([4]))
        assert subscriber1.messages == [bytes([3]), bytes([3])]
        assert subscriber2.messages == [bytes([3])]

        any_broker.subscribe(subscriber3, "topics/+/bar")
        any_broker.subscribe(subscriber4, "topics/#")

        any_broker.publish("topics/foo/bar", bytes([3]))
        any_broker.publish("topics/bar/baz/boo", bytes([4]))
        any_broker.publish("topics/boo/bar/zoo", bytes([5]))
        any_broker.publish("topics/foo/bar/zoo", bytes([6]))
        any_broker.publish("topics/bbobobobo/bar", bytes([7]))

        assert subscriber1.messages == [bytes([3])] * 3
        assert subscriber2.messages == [bytes([3]), bytes([3]), bytes([6])]
        assert subscriber3.messages == [bytes([3]), bytes([7])]
        assert subscriber4.messages == [bytes([n]) for n in (3, 4, 5, 6, 7)]

    def test_match_order_is_literal_then_multi_then_single(self, any_broker: InMemoryBroker) -> None:
        """Test the deterministic order in which matched subscribers are called."""
        literal = RecordingSubscriber("literal")
        multi = RecordingSubscriber("multi")
        single = RecordingSubscriber("single")
        any_broker.subscribe(single, "a/+")
        any_broker.subscribe(multi, "a/#")
        any_broker.subscribe(literal, "a/b")

        assert any_broker.match("a/b") == [literal, multi, single]


@pytest.mark.slow
class TestTrieAgreesWithPredicate:
    """Cross-check the trie walk against the trie-free predicate."""

    SEGMENTS = ["a", "b", "+", "#", ""]

    def _topics(self, max_depth: int) -> list[str]:
        topics = []
        for depth in range(1, max_depth + 1):
            for parts in itertools.product(self.SEGMENTS, repeat=depth):
                topics.append("/".join(parts))
        return topics

    def test_delivery_counts_match_predicate(self, any_broker: InMemoryBroker) -> None:
        """Test that every subscription is delivered to exactly when the predicate says so."""
        filters = self._topics(3)
        names = [t for t in self._topics(3) if "+" not in t.split("/") and "#" not in t.split("/")]

        subscribers = {}
        for pattern in filters:
            subscriber = RecordingSubscriber(pattern)
            any_broker.subscribe(subscriber, pattern)
            subscribers[pattern] = subscriber

        for topic in names:
            delivered = any_broker.match(topic)
            expected = [p for p in filters if match_topic_pattern(p, topic)]
            assert sorted(s.name for s in delivered) == sorted(expected), topic
