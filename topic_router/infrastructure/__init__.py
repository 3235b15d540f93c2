"""Infrastructure layer exports."""

from .broker_factory import BrokerFactory, BrokerType
from .in_memory_broker import InMemoryBroker
from .in_memory_queue import InMemoryQueue
from .match_cache import MatchCache
from .queued_subscriber import QueuedSubscriber
from .thread_safe_broker import ThreadSafeBroker
from .topic_trie import TopicNode, TopicTrie

__all__ = [
    "BrokerFactory",
    "BrokerType",
    "InMemoryBroker",
    "InMemoryQueue",
    "MatchCache",
    "QueuedSubscriber",
    "ThreadSafeBroker",
    "TopicNode",
    "TopicTrie",
]
