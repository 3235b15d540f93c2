"""Topic splitting, validation and matching helpers for wildcard subscriptions."""

from topic_router.domain.errors import InvalidTopicError

TOPIC_SEPARATOR = "/"
SINGLE_LEVEL_WILDCARD = "+"
MULTI_LEVEL_WILDCARD = "#"


def split_topic(topic: str) -> list[str]:
    """
    Split a topic into its segments.

    No normalization is applied: empty segments are kept as literal empty strings.

    Examples:
        >>> split_topic("finance/stock/ibm")
        ['finance', 'stock', 'ibm']
        >>> split_topic("/finance")
        ['', 'finance']
    """
    return topic.split(TOPIC_SEPARATOR)


def is_wildcard_segment(segment: str) -> bool:
    """Return True only if the whole segment is `+` or `#`."""
    return segment in (SINGLE_LEVEL_WILDCARD, MULTI_LEVEL_WILDCARD)


def validate_topic_filter(topic: str) -> None:
    """
    Validate a subscription filter.

    A `#` segment must be the last segment of the filter.

    Args:
        topic: Topic filter used to subscribe.

    Raises:
        InvalidTopicError: If `#` appears before the last segment.
    """
    segments = split_topic(topic)
    for index, segment in enumerate(segments[:-1]):
        if segment == MULTI_LEVEL_WILDCARD:
            raise InvalidTopicError(
                f"Topic filter '{topic}' has '{MULTI_LEVEL_WILDCARD}' at segment {index}; "
                "it is only allowed as the last segment"
            )


def validate_topic_name(topic: str) -> None:
    """
    Validate a topic name used for publishing.

    Raises:
        InvalidTopicError: If any segment is a wildcard.
    """
    for segment in split_topic(topic):
        if is_wildcard_segment(segment):
            raise InvalidTopicError(
                f"Topic name '{topic}' contains wildcard segment '{segment}'"
            )


def _segment_matches(pattern_segment: str, topic_segment: str) -> bool:
    return is_wildcard_segment(pattern_segment) or pattern_segment == topic_segment


def _prefix_reachable(pattern: list[str], topic: list[str], depth: int) -> bool:
    # The node `depth` levels down the pattern path is reached by the trie walk
    # when every edge matches and no `#` edge was crossed before the last one.
    if depth > len(topic):
        return False
    if MULTI_LEVEL_WILDCARD in pattern[: depth - 1]:
        return False
    return all(_segment_matches(pattern[i], topic[i]) for i in range(depth))


def match_topic_pattern(pattern: str, topic: str) -> bool:
    """
    Check if a subscription with `pattern` is notified by a publish of `topic`.

    This answers the same question as the broker's trie walk, for a single
    subscription and without building a trie:
    - `+` matches exactly one segment.
    - `#` matches all remaining segments; matching stops at the first `#`.
    - `prefix/#` additionally matches the bare `prefix`.
    - Wildcards are only recognised as whole segments.

    Args:
        pattern: Topic filter the subscription was made with.
        topic: Topic name being published.

    Returns:
        True if the subscription receives the publish, False otherwise.

    Examples:
        >>> match_topic_pattern("foo/+", "foo/bar")
        True
        >>> match_topic_pattern("foo/+", "foo/bar/baz")
        False
        >>> match_topic_pattern("finance/#", "finance")
        True
        >>> match_topic_pattern("finance#", "finance")
        False
    """
    pattern_segments = split_topic(pattern)
    topic_segments = split_topic(topic)
    depth = len(pattern_segments)
    last = pattern_segments[-1]

    if depth <= len(topic_segments):
        return _prefix_reachable(pattern_segments, topic_segments, depth) and (
            depth == len(topic_segments) or last == MULTI_LEVEL_WILDCARD
        )

    # A trailing `#` one level below a fully consumed topic.
    return (
        depth == len(topic_segments) + 1
        and last == MULTI_LEVEL_WILDCARD
        and _prefix_reachable(pattern_segments, topic_segments, depth - 1)
    )
