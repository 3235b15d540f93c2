import logging
from collections.abc import AsyncGenerator

from topic_router.domain.queue_port import QueuePort
from topic_router.domain.subscriber_port import SubscriberPort

from .in_memory_queue import InMemoryQueue

logger = logging.getLogger(__name__)


class QueuedSubscriber(SubscriberPort):
    """
    A subscriber that defers delivery to an asyncio consumer.

    `receive` only enqueues the payload, so a publish returns without running
    any handler code. Payloads are read back with the `consume` async generator,
    which ends after `close` is called and the queue has drained.

    Must be used from the thread running the consumer's event loop.

    Example:
        subscriber = QueuedSubscriber()
        broker.subscribe(subscriber, "jobs/#")

        async for payload in subscriber.consume():
            await handle(payload)
    """

    def __init__(self, queue: QueuePort[bytes | None] | None = None) -> None:
        """
        Args:
            queue: Queue to buffer payloads in. Defaults to an unbounded InMemoryQueue.
        """
        self.queue: QueuePort[bytes | None] = queue if queue is not None else InMemoryQueue()
        self.closed = False

    def receive(self, payload: bytes) -> None:
        if self.closed:
            logger.warning(f"{self} is closed, dropping payload of {len(payload)} bytes")
            return
        self.queue.put_nowait(bytes(payload))

    def close(self) -> None:
        """Stop accepting payloads and end `consume` once the queue drains."""
        if self.closed:
            return
        self.closed = True
        # None marks the end of the stream
        self.queue.put_nowait(None)

    async def consume(self) -> AsyncGenerator[bytes, None]:
        """
        Yields payloads in the order they were received.
        """
        while True:
            payload = await self.queue.get()

            if payload is None:
                logger.info(f"{self} closed, ending stream")
                self.queue.task_done()
                break

            yield payload
            self.queue.task_done()
