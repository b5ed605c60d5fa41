"""
Base Entity Search Adapter

Defines the interface shared by the per-entity retrieval adapters. Each
adapter owns one repository and maps its rows onto SearchResult with a
fixed ``type`` tag.

Two retrieval modes:
- Ranked: full-text match plus filters, each row carries a relevance weight
- Unranked: filters only, relevance left unset

Any store failure is logged and re-raised as RetrievalFailedError naming
the entity kind, so driver exceptions never reach callers.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ....models.search import SearchFilters, SearchResult
from ..components.filters import build_predicates
from ..errors import EntityNotFoundError, RetrievalFailedError

logger = logging.getLogger(__name__)


class EntitySearchAdapter(ABC):
    """
    Abstract base class for per-entity retrieval adapters.

    Subclasses set ``entity_type`` and implement ``to_result``.
    """

    entity_type: str = ""

    def __init__(self, repository):
        """
        Initialize adapter with its repository.

        Args:
            repository: Entity repository exposing text_search, filter and
                get_by_reference_id
        """
        self.repository = repository

    @abstractmethod
    def to_result(self, entity: Any, relevance: Optional[float] = None) -> SearchResult:
        """
        Map a store row onto a SearchResult.

        Args:
            entity: Row returned by the repository
            relevance: Ranking weight (ranked path only)

        Returns:
            SearchResult tagged with this adapter's entity type
        """
        pass

    async def search(self, expression: str, filters: SearchFilters) -> List[SearchResult]:
        """
        Ranked retrieval: full-text match AND filters.

        Args:
            expression: Prepared tsquery expression
            filters: Structured filters

        Returns:
            Results with non-negative relevance

        Raises:
            RetrievalFailedError: If the store call or row mapping fails
        """
        predicates = build_predicates(self.entity_type, filters)
        try:
            rows = await self.repository.text_search(expression, predicates)
            return [self.to_result(entity, max(float(relevance or 0.0), 0.0)) for entity, relevance in rows]
        except Exception as e:
            logger.error(f"Ranked {self.entity_type} retrieval failed: {e}", exc_info=True)
            raise RetrievalFailedError(self.entity_type) from e

    async def filter(self, filters: SearchFilters) -> List[SearchResult]:
        """
        Unranked retrieval: filters only.

        Raises:
            RetrievalFailedError: If the store call or row mapping fails
        """
        predicates = build_predicates(self.entity_type, filters)
        try:
            rows = await self.repository.filter(predicates)
            return [self.to_result(entity) for entity in rows]
        except Exception as e:
            logger.error(f"Unranked {self.entity_type} retrieval failed: {e}", exc_info=True)
            raise RetrievalFailedError(self.entity_type) from e

    async def lookup(self, reference_id: str) -> SearchResult:
        """
        Exact reference ID lookup (case-insensitive).

        Returns:
            Matching result with relevance 1.0

        Raises:
            EntityNotFoundError: If nothing matches
            RetrievalFailedError: If the store call or row mapping fails
        """
        try:
            entity = await self.repository.get_by_reference_id(reference_id)
            return self.to_result(entity, 1.0)
        except EntityNotFoundError:
            raise
        except Exception as e:
            logger.error(f"{self.entity_type} reference lookup failed: {e}", exc_info=True)
            raise RetrievalFailedError(self.entity_type) from e

    def get_name(self) -> str:
        """
        Get the name of this adapter.

        Returns:
            Entity kind handled by the adapter (e.g., "epic")
        """
        return self.entity_type
