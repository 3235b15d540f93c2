"""
Wildcard Routing Example

This example demonstrates how to use the topic router to:
1. Subscribe to topic filters with `+` and `#` wildcards
2. Publish payloads and see which subscribers receive them
3. Unsubscribe from one topic or from all of them
4. Hand payloads to an asyncio consumer with QueuedSubscriber

Run from the project root:
    python examples/wildcard_routing_example.py
"""

import asyncio
import logging

from topic_router import (
    BrokerFactory,
    BrokerType,
    CallbackSubscriber,
    QueuedSubscriber,
)


def printer(name: str) -> CallbackSubscriber:
    return CallbackSubscriber(lambda payload: print(f"   [{name}] received {list(payload)}"))


async def main() -> None:
    print("=" * 60)
    print("Topic Router Example")
    print("=" * 60)

    broker = BrokerFactory.create_broker(BrokerType.IN_MEMORY, use_cache=True)

    print("\n1. Single-level wildcard")
    s1 = printer("s1 topics/foo/+")
    broker.subscribe(s1, "topics/foo/+")
    broker.publish("topics/foo/bar", bytes([3]))
    broker.publish("topics/bar/baz/boo", bytes([4]))  # nobody

    print("\n2. Multi-level wildcard")
    s2 = printer("s2 topics/foo/#")
    broker.subscribe(s2, "topics/foo/#")
    broker.publish("topics/foo/bar", bytes([3]))
    broker.publish("topics/foo", bytes([5]))

    print("\n3. Unsubscribe")
    broker.unsubscribe(s1, ["topics/foo/+"])
    broker.publish("topics/foo/bar", bytes([6]))
    broker.unsubscribe_all(s2)
    delivered = broker.publish("topics/foo/bar", bytes([7]))
    print(f"   deliveries after unsubscribe_all: {delivered}")

    print("\n4. Deferred delivery")
    queued = QueuedSubscriber()
    broker.subscribe(queued, "jobs/#")
    for n in range(3):
        broker.publish(f"jobs/batch/{n}", bytes([n]))
    queued.close()
    async for payload in queued.consume():
        print(f"   [queued] consumed {list(payload)}")

    print("\n5. Broker Statistics:")
    for key, value in broker.get_stats().items():
        print(f"   {key}: {value}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(main())
