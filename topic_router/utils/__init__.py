"""Utility modules for the topic router."""

from .topic_matcher import (
    MULTI_LEVEL_WILDCARD,
    SINGLE_LEVEL_WILDCARD,
    TOPIC_SEPARATOR,
    is_wildcard_segment,
    match_topic_pattern,
    split_topic,
    validate_topic_filter,
    validate_topic_name,
)

__all__ = [
    "MULTI_LEVEL_WILDCARD",
    "SINGLE_LEVEL_WILDCARD",
    "TOPIC_SEPARATOR",
    "is_wildcard_segment",
    "match_topic_pattern",
    "split_topic",
    "validate_topic_filter",
    "validate_topic_name",
]
