"""Domain layer exports."""

from .broker_port import BrokerPort
from .config import BrokerConfig
from .errors import InvalidTopicError
from .queue_port import QueuePort
from .subscriber_port import CallbackSubscriber, SubscriberPort
from .subscription import Subscription

__all__ = [
    "BrokerPort",
    "BrokerConfig",
    "CallbackSubscriber",
    "InvalidTopicError",
    "QueuePort",
    "SubscriberPort",
    "Subscription",
]
