"""Aggregation pipeline: collect, filter, deduplicate, sort."""

from .collector import CollectedDeclarations, collect
from .dedup import Deduplicator, distinct_by_key
from .ordering import sort_dependencies, sort_plugins, sort_repositories
from .pipeline import AggregateDescriptor, AggregationConfig, aggregate, generate, is_top_level
from .policy import RepositoryFilter, exclude_self_references, is_self_reference

__all__ = [
    "AggregateDescriptor",
    "AggregationConfig",
    "CollectedDeclarations",
    "Deduplicator",
    "RepositoryFilter",
    "aggregate",
    "collect",
    "distinct_by_key",
    "exclude_self_references",
    "generate",
    "is_self_reference",
    "is_top_level",
    "sort_dependencies",
    "sort_plugins",
    "sort_repositories",
]
