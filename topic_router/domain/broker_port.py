from abc import ABC, abstractmethod
from collections.abc import Iterable

from .subscriber_port import SubscriberPort
from .subscription import Subscription


class BrokerPort(ABC):
    """
    An abstract port for an in-process publish/subscribe broker.
    It defines the interface for subscribing to topic filters and publishing payloads.
    """

    @abstractmethod
    def subscribe(self, subscriber: SubscriberPort, topic: str) -> Subscription:
        """
        Subscribes a subscriber to a topic filter.

        Supports wildcards:
        - + matches exactly one level (e.g., foo/+ matches foo/bar)
        - # matches the remaining levels (e.g., foo/# matches foo, foo/bar and foo/bar/baz)

        Subscribing the same subscriber to the same filter twice is not
        deduplicated; each subscription is delivered to independently.
        """
        raise NotImplementedError

    @abstractmethod
    def unsubscribe(self, subscriber: SubscriberPort, topics: Iterable[str]) -> int:
        """
        Removes the subscriber's subscriptions whose topic filter is literally in `topics`.

        Returns the number of subscriptions removed.
        """
        raise NotImplementedError

    @abstractmethod
    def unsubscribe_all(self, subscriber: SubscriberPort) -> int:
        """Removes every subscription of the subscriber and returns how many were removed."""
        raise NotImplementedError

    @abstractmethod
    def publish(self, topic: str, payload: bytes) -> int:
        """
        Delivers the payload synchronously to every matching subscription.

        Returns the number of deliveries made.
        """
        raise NotImplementedError
