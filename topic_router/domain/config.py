"""Broker configuration model."""

from pydantic import BaseModel, ConfigDict, Field


class BrokerConfig(BaseModel):
    """
    Configuration for a topic broker.

    All options default to the permissive behaviour: no caching, no topic
    validation and a trie that only grows.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    use_cache: bool = Field(
        default=False,
        description="Memoize match results per exact published topic until the next mutation",
    )
    strict_topics: bool = Field(
        default=False,
        description=(
            "Reject subscription filters with a non-terminal '#' and "
            "published topic names containing wildcard segments"
        ),
    )
    prune_empty_nodes: bool = Field(
        default=False,
        description="Remove trie branches left without subscriptions after unsubscribing",
    )
