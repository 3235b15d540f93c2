"""In-memory queue implementation using asyncio.Queue."""

import asyncio
from typing import Generic, TypeVar

from topic_router.domain.queue_port import QueuePort

T = TypeVar("T")


class InMemoryQueue(QueuePort[T], Generic[T]):
    """
    An in-memory, asyncio-based implementation of the QueuePort.
    It uses asyncio.Queue as the underlying queue implementation.

    The queue is unbounded: `put_nowait` is called from inside a synchronous
    publish and must never fail for lack of space.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[T] = asyncio.Queue()

    def put_nowait(self, item: T) -> None:
        """
        Put an item into the queue.

        Args:
            item: The item to enqueue.
        """
        self._queue.put_nowait(item)

    async def get(self) -> T:
        """
        Get an item from the queue.

        Returns:
            The next item from the queue.
        """
        return await self._queue.get()

    def qsize(self) -> int:
        return self._queue.qsize()

    def empty(self) -> bool:
        return self._queue.empty()

    def task_done(self) -> None:
        """
        Indicate that a formerly enqueued item is complete.

        For each get() used to fetch an item, a subsequent call to task_done()
        tells the queue that the processing on the item is complete.
        """
        self._queue.task_done()

    async def join(self) -> None:
        """
        Block until all items in the queue have been gotten and processed.
        """
        await self._queue.join()
