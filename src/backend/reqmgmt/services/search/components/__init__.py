"""
Search query components.

Query normalization for the full-text index and per-entity filter
predicates shared by the retrieval adapters and repositories.
"""

from .query_builder import prepare_query
from .filters import FilterPredicate, build_predicates, FILTER_MAPPINGS

__all__ = [
    "prepare_query",
    "FilterPredicate",
    "build_predicates",
    "FILTER_MAPPINGS",
]
