"""Queue port interface for deferred payload delivery."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class QueuePort(ABC, Generic[T]):
    """
    An abstract port for a delivery queue.

    Producers are synchronous (a broker dispatching a publish), consumers are
    asynchronous, so `put_nowait` is sync and `get` is a coroutine.
    """

    @abstractmethod
    def put_nowait(self, item: T) -> None:
        """Put an item into the queue without blocking."""
        raise NotImplementedError

    @abstractmethod
    async def get(self) -> T:
        """Get an item from the queue, waiting until one is available."""
        raise NotImplementedError

    @abstractmethod
    def qsize(self) -> int:
        """Return the approximate size of the queue."""
        raise NotImplementedError

    @abstractmethod
    def empty(self) -> bool:
        """Return True if the queue is empty."""
        raise NotImplementedError

    @abstractmethod
    def task_done(self) -> None:
        """
        Indicate that a formerly enqueued item has been processed.
        Used by queue consumers.
        """
        raise NotImplementedError

    @abstractmethod
    async def join(self) -> None:
        """
        Block until all items in the queue have been gotten and processed.
        """
        raise NotImplementedError
