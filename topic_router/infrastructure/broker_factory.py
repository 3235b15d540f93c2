"""
Factory for creating brokers.
Provides a unified interface for broker creation from plain configuration.
"""

from enum import StrEnum, auto
from typing import Any

from topic_router.domain.config import BrokerConfig

from .in_memory_broker import InMemoryBroker
from .thread_safe_broker import ThreadSafeBroker


class BrokerType(StrEnum):
    """Enumeration of available broker types."""

    IN_MEMORY = auto()
    THREAD_SAFE = auto()


class BrokerFactory:
    """
    Factory for creating broker instances.

    Example:
        # Single-threaded broker with match caching
        broker = BrokerFactory.create_broker(BrokerType.IN_MEMORY, use_cache=True)

        # Broker shared between threads, from a config mapping
        broker = BrokerFactory.create_broker("thread_safe", **settings["broker"])
    """

    @staticmethod
    def create_broker(
        broker_type: BrokerType | str = BrokerType.IN_MEMORY, **kwargs: Any
    ) -> InMemoryBroker | ThreadSafeBroker:
        """
        Create a broker instance based on the specified type.

        Args:
            broker_type: Type of broker to create.
            **kwargs: BrokerConfig fields (use_cache, strict_topics, prune_empty_nodes).

        Returns:
            A broker instance.

        Raises:
            ValueError: If broker_type is invalid.
            pydantic.ValidationError: If the configuration is invalid.
        """
        if isinstance(broker_type, str):
            try:
                broker_type = BrokerType(broker_type.lower())
            except ValueError as e:
                raise ValueError(
                    f"Invalid broker type '{broker_type}'. "
                    f"Must be one of: {[t.value for t in BrokerType]}"
                ) from e

        config = BrokerConfig(**kwargs)

        if broker_type == BrokerType.IN_MEMORY:
            return InMemoryBroker(config=config)
        elif broker_type == BrokerType.THREAD_SAFE:
            return ThreadSafeBroker(config=config)
        else:
            raise ValueError(f"Unsupported broker type: {broker_type}")
