"""In-process publish/subscribe topic router with `+` and `#` wildcards."""

from topic_router.domain import (
    BrokerConfig,
    BrokerPort,
    CallbackSubscriber,
    InvalidTopicError,
    SubscriberPort,
    Subscription,
)
from topic_router.infrastructure import (
    BrokerFactory,
    BrokerType,
    InMemoryBroker,
    QueuedSubscriber,
    ThreadSafeBroker,
)
from topic_router.utils import match_topic_pattern

__all__ = [
    # Domain
    "BrokerConfig",
    "BrokerPort",
    "CallbackSubscriber",
    "InvalidTopicError",
    "SubscriberPort",
    "Subscription",
    # Infrastructure
    "BrokerFactory",
    "BrokerType",
    "InMemoryBroker",
    "QueuedSubscriber",
    "ThreadSafeBroker",
    # Utils
    "match_topic_pattern",
]
