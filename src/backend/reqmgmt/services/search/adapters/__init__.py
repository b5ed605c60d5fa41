"""Per-entity retrieval adapters (ranked and unranked)."""

from .base import EntitySearchAdapter
from .entity_adapters import (
    TitledEntityAdapter,
    EpicSearchAdapter,
    UserStorySearchAdapter,
    AcceptanceCriteriaSearchAdapter,
    RequirementSearchAdapter,
    build_adapters,
)

__all__ = [
    "EntitySearchAdapter",
    "TitledEntityAdapter",
    "EpicSearchAdapter",
    "UserStorySearchAdapter",
    "AcceptanceCriteriaSearchAdapter",
    "RequirementSearchAdapter",
    "build_adapters",
]
