"""
Topic trie.
Stores subscriptions in a tree keyed by topic segment.
"""

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field

from topic_router.domain.subscription import Subscription

logger = logging.getLogger(__name__)


@dataclass
class TopicNode:
    """
    A node in the topic trie.

    Attributes:
        children: Child nodes keyed by segment. `+` and `#` are stored as ordinary keys.
        subscriptions: Subscriptions whose topic ends exactly at this node, in insertion order.
    """

    children: dict[str, "TopicNode"] = field(default_factory=dict)
    subscriptions: list[Subscription] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Check if this node holds no subscriptions and has no children."""
        return not self.subscriptions and not self.children


class TopicTrie:
    """
    Tree of TopicNodes. The path from the root to a node spells the segments
    of some subscribed topic.

    Nodes are created lazily by `ensure_path` and are only removed by an
    explicit `prune`.
    """

    def __init__(self) -> None:
        self.root = TopicNode()

    def ensure_path(self, segments: Sequence[str]) -> TopicNode:
        """
        Create any missing nodes along the segment path.

        Idempotent: existing nodes are left untouched.

        Args:
            segments: Topic segments, as produced by split_topic.

        Returns:
            The terminal node of the path.
        """
        node = self.root
        for segment in segments:
            child = node.children.get(segment)
            if child is None:
                child = TopicNode()
                node.children[segment] = child
            node = child
        return node

    def find(self, segments: Sequence[str]) -> TopicNode | None:
        """Return the node at the end of the segment path, or None if it does not exist."""
        node = self.root
        for segment in segments:
            child = node.children.get(segment)
            if child is None:
                return None
            node = child
        return node

    def insert_subscription(self, segments: Sequence[str], subscription: Subscription) -> None:
        """
        Attach a subscription at the terminal node of an already ensured path.

        Calling this on a path that was not ensured is a programming error.
        """
        assert segments, "cannot attach a subscription to the trie root"
        node = self.find(segments)
        assert node is not None, f"path {list(segments)} was not ensured before insert"
        node.subscriptions.append(subscription)

    def remove_subscriptions(self, predicate: Callable[[Subscription], bool]) -> int:
        """
        Remove every subscription for which `predicate` returns True, in every node.

        Args:
            predicate: Selects the subscriptions to remove.

        Returns:
            Number of subscriptions removed.
        """
        return self._remove(self.root, predicate)

    def _remove(self, node: TopicNode, predicate: Callable[[Subscription], bool]) -> int:
        kept = [subscription for subscription in node.subscriptions if not predicate(subscription)]
        removed = len(node.subscriptions) - len(kept)
        node.subscriptions = kept

        for child in node.children.values():
            removed += self._remove(child, predicate)
        return removed

    def prune(self) -> int:
        """
        Drop branches that hold no subscriptions anywhere below them.

        Returns:
            Number of nodes removed.
        """
        removed = self._prune(self.root)
        if removed:
            logger.info(f"Pruned {removed} empty topic nodes")
        return removed

    def _prune(self, node: TopicNode) -> int:
        removed = 0
        for segment in list(node.children):
            child = node.children[segment]
            removed += self._prune(child)
            if child.is_empty():
                del node.children[segment]
                removed += 1
        return removed

    def iter_subscriptions(self) -> Iterator[Subscription]:
        """Yield every stored subscription, depth first."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield from node.subscriptions
            stack.extend(node.children.values())

    def node_count(self) -> int:
        """Count the nodes below the root."""
        count = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            count += len(node.children)
            stack.extend(node.children.values())
        return count
