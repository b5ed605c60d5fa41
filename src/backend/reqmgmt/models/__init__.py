"""Models package - ORM entities, search value types and resource descriptors"""

from .entities import (
    Epic,
    UserStory,
    AcceptanceCriteria,
    Requirement,
    RequirementType
)

from .search import (
    ReferenceIDPattern,
    SearchFilters,
    SearchOptions,
    SearchResult,
    SearchResponse,
    SearchSuggestions
)

from .resources import ResourceDescriptor

__all__ = [
    "Epic",
    "UserStory",
    "AcceptanceCriteria",
    "Requirement",
    "RequirementType",
    "ReferenceIDPattern",
    "SearchFilters",
    "SearchOptions",
    "SearchResult",
    "SearchResponse",
    "SearchSuggestions",
    "ResourceDescriptor"
]
