"""
Result Consolidator

Merges per-entity result lists into one ordered, paginated sequence:
- Concatenates results from every adapter
- Sorts by the requested key and direction
- Breaks ties on created_at (descending) then id (ascending)
- Reports the pre-pagination total and returns the requested slice

Merging happens in memory because the entity kinds live in separate tables
and their ts_rank scores are not comparable across tables.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List

from ...models.search import SearchResult

logger = logging.getLogger(__name__)


def _title_key(result: SearchResult) -> str:
    return result.title.casefold()


SORT_KEYS: Dict[str, Callable[[SearchResult], Any]] = {
    "priority": lambda result: result.priority,
    "created_at": lambda result: result.created_at,
    "updated_at": lambda result: result.updated_at,
    "title": _title_key,
}


@dataclass(frozen=True)
class ConsolidatedPage:
    """
    Paginated slice of the merged results.

    Attributes:
        results: Results in the requested window
        total: Length of the merged sequence before pagination
    """
    results: List[SearchResult]
    total: int


class ResultConsolidator:
    """Deterministic merge, sort and pagination of cross-entity results."""

    def merge(
        self,
        result_sets: Iterable[List[SearchResult]],
        sort_by: str,
        sort_order: str
    ) -> List[SearchResult]:
        """
        Concatenate and sort result sets.

        Results whose sort value is missing (e.g. acceptance criteria have
        no priority) are placed after all others, keeping tie-break order.

        Args:
            result_sets: One result list per entity kind
            sort_by: priority, created_at, updated_at or title
            sort_order: asc or desc

        Returns:
            Fully ordered list
        """
        merged = [result for results in result_sets for result in results]
        sort_key = SORT_KEYS[sort_by]

        # Stable sorts applied from least to most significant key
        merged.sort(key=lambda result: str(result.id))
        merged.sort(key=lambda result: result.created_at, reverse=True)

        present = [result for result in merged if sort_key(result) is not None]
        missing = [result for result in merged if sort_key(result) is None]
        present.sort(key=sort_key, reverse=(sort_order == "desc"))

        return present + missing

    def paginate(self, merged: List[SearchResult], limit: int, offset: int) -> ConsolidatedPage:
        """
        Slice the merged sequence.

        Args:
            merged: Fully ordered results
            limit: Page size
            offset: Start position; negative values are clamped to 0

        Returns:
            ConsolidatedPage with the window and the pre-pagination total
        """
        total = len(merged)
        start = max(offset, 0)

        if start >= total:
            return ConsolidatedPage(results=[], total=total)

        end = min(start + limit, total)
        return ConsolidatedPage(results=merged[start:end], total=total)

    def consolidate(
        self,
        result_sets: Iterable[List[SearchResult]],
        sort_by: str,
        sort_order: str,
        limit: int,
        offset: int
    ) -> ConsolidatedPage:
        """Merge, sort and paginate in one step."""
        merged = self.merge(result_sets, sort_by, sort_order)
        page = self.paginate(merged, limit, offset)

        logger.debug(
            f"Consolidated {page.total} results "
            f"(sort_by={sort_by}, sort_order={sort_order}, returned={len(page.results)})"
        )
        return page
