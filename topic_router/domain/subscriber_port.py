"""Subscriber port and a callable adapter."""

import copy
import uuid
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from uuid6 import uuid7

_SUBSCRIBER_ID_ATTR = "_subscriber_id"


class SubscriberPort(ABC):
    """
    An abstract port for anything that receives published payloads.

    Each instance has an opaque, read-only `subscriber_id`, assigned on first
    access. The broker uses it to tell subscribers apart, so two subscribers
    with identical state are still different subscribers. Subclasses do not
    need to call `super().__init__()`, which keeps dataclass subscribers valid.
    Copies made with the `copy` module are new subscribers and get a new id.
    """

    @property
    def subscriber_id(self) -> uuid.UUID:
        return self.__dict__.setdefault(_SUBSCRIBER_ID_ATTR, uuid7())

    @abstractmethod
    def receive(self, payload: bytes) -> None:
        """Receives a payload published to a topic this subscriber matched."""
        raise NotImplementedError

    def __copy__(self) -> "SubscriberPort":
        clone = self.__class__.__new__(self.__class__)
        for key, value in self.__dict__.items():
            if key != _SUBSCRIBER_ID_ATTR:
                clone.__dict__[key] = value
        return clone

    def __deepcopy__(self, memo: dict[int, Any]) -> "SubscriberPort":
        clone = self.__class__.__new__(self.__class__)
        memo[id(self)] = clone
        for key, value in self.__dict__.items():
            if key != _SUBSCRIBER_ID_ATTR:
                clone.__dict__[key] = copy.deepcopy(value, memo)
        return clone

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self.subscriber_id})"

    def __repr__(self) -> str:
        return self.__str__()


class CallbackSubscriber(SubscriberPort):
    """
    Adapts a plain callable to the SubscriberPort interface.

    Example:
        subscriber = CallbackSubscriber(lambda payload: print(payload))
        broker.subscribe(subscriber, "sensors/+/temperature")
    """

    def __init__(self, callback: Callable[[bytes], None]) -> None:
        """
        Args:
            callback: Function invoked with every received payload.

        Raises:
            ValueError: If callback is not callable.
        """
        if not callable(callback):
            raise ValueError("callback must be callable")
        self._callback = callback

    def receive(self, payload: bytes) -> None:
        self._callback(payload)
