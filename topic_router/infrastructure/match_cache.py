"""Exact-topic memoization of match results."""

import logging

from topic_router.domain.subscriber_port import SubscriberPort

logger = logging.getLogger(__name__)


class MatchCache:
    """
    Maps an exact published topic string to the subscribers it matched.

    Entries stay valid only until the next subscribe or unsubscribe, which
    must call `invalidate` before changing the trie.
    """

    def __init__(self) -> None:
        self._entries: dict[str, list[SubscriberPort]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, topic: str) -> list[SubscriberPort] | None:
        """
        Look up the cached subscribers for a topic.

        Returns:
            The cached subscriber list in dispatch order, or None on a miss.
        """
        subscribers = self._entries.get(topic)
        if subscribers is None:
            self.misses += 1
        else:
            self.hits += 1
        return subscribers

    def store(self, topic: str, subscribers: list[SubscriberPort]) -> None:
        """Remember the subscribers matched by a publish of `topic`."""
        self._entries[topic] = list(subscribers)

    def invalidate(self) -> None:
        """Drop every entry."""
        if self._entries:
            logger.debug(f"Invalidating match cache ({len(self._entries)} entries)")
        self._entries.clear()

    def __contains__(self, topic: object) -> bool:
        return topic in self._entries

    def __len__(self) -> int:
        return len(self._entries)
