"""
Subscription model.
Pairs a subscriber with the topic filter it subscribed with.
"""

import uuid
from dataclasses import dataclass, field

from uuid6 import uuid7

from topic_router.domain.subscriber_port import SubscriberPort


@dataclass
class Subscription:
    """
    A single (subscriber, topic) pairing stored in the topic trie.

    Attributes:
        subscriber: The subscriber notified on a match.
        topic: The topic filter exactly as passed to subscribe.
        subscription_id: Unique identifier of this pairing. Tells duplicate
            subscriptions of one subscriber to one topic apart.
    """

    subscriber: SubscriberPort
    topic: str
    subscription_id: uuid.UUID = field(default_factory=uuid7)

    def __post_init__(self) -> None:
        """Validate subscription data."""
        if not isinstance(self.subscriber, SubscriberPort):
            raise TypeError(
                f"subscriber must be a SubscriberPort, got {type(self.subscriber).__name__}"
            )
        if not isinstance(self.topic, str):
            raise TypeError(f"topic must be a str, got {type(self.topic).__name__}")

    def belongs_to(self, subscriber: SubscriberPort) -> bool:
        """Check if this subscription was made by the given subscriber instance."""
        return self.subscriber.subscriber_id == subscriber.subscriber_id
