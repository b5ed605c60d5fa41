"""
Search Package

Cross-entity search over the planning hierarchy:
- Reference ID detection (EP-001, US-119, AC-042, REQ-007, STD-003)
- Ranked full-text retrieval and unranked filtered retrieval per entity kind
- Merge, sort and pagination of the per-kind result sets
- Redis-backed response cache with namespace invalidation

SearchOrchestrator is the entry point; adapters are built from repositories.
"""

from .adapters import EntitySearchAdapter, build_adapters
from .cache import SearchCache
from .consolidator import ResultConsolidator, ConsolidatedPage
from .errors import (
    SearchError,
    InvalidSearchOptionsError,
    RetrievalFailedError,
    EntityNotFoundError
)
from .orchestrator import SearchOrchestrator
from .reference_id import ReferenceIDDetector

__all__ = [
    "EntitySearchAdapter",
    "build_adapters",
    "SearchCache",
    "ResultConsolidator",
    "ConsolidatedPage",
    "SearchError",
    "InvalidSearchOptionsError",
    "RetrievalFailedError",
    "EntityNotFoundError",
    "SearchOrchestrator",
    "ReferenceIDDetector",
]
