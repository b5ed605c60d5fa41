"""
Search Orchestrator

Coordinates a cross-entity search:
- Validates options (ranges and enumerations)
- Serves cached responses keyed by the full option shape
- Picks the ranked (query text) or unranked (filters only) path
- Runs one retrieval adapter per entity kind, in parallel or sequentially
- Aborts on the first adapter failure without caching
- Merges, sorts and paginates via ResultConsolidator
- Writes the response back to the cache (best-effort)

Also serves exact reference ID lookups and typeahead suggestions.
"""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ...models.search import (
    DEFAULT_SORT_BY,
    DEFAULT_SORT_ORDER,
    SEARCHABLE_ENTITY_TYPES,
    SORT_FIELDS,
    SORT_ORDERS,
    SearchFilters,
    SearchOptions,
    SearchResponse,
    SearchResult,
    SearchSuggestions,
)
from ...utils.logging_context import log_context
from .adapters.base import EntitySearchAdapter
from .cache import SearchCache
from .components.query_builder import prepare_query
from .consolidator import ResultConsolidator
from .errors import EntityNotFoundError, InvalidSearchOptionsError, RetrievalFailedError
from .reference_id import ReferenceIDDetector

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """
    Orchestrates search across the per-entity adapters.

    Args:
        adapters: Dict of {entity_type: adapter}
        cache: SearchCache; None runs without caching
        consolidator: ResultConsolidator instance
        config: Orchestrator configuration
            Example:
            {
                "execution_mode": "parallel" | "sequential",
                "timeout_seconds": 30,
                "default_limit": 50,
                "max_limit": 100
            }
        suggestions_config: {"default_limit", "max_limit", "statuses"}
    """

    def __init__(
        self,
        adapters: Dict[str, EntitySearchAdapter],
        cache: Optional[SearchCache] = None,
        consolidator: Optional[ResultConsolidator] = None,
        config: Optional[Dict[str, Any]] = None,
        suggestions_config: Optional[Dict[str, Any]] = None
    ):
        self.adapters = adapters
        self.cache = cache or SearchCache(None)
        self.consolidator = consolidator or ResultConsolidator()
        self.detector = ReferenceIDDetector()

        config = config or {}
        self.execution_mode = config.get("execution_mode", "parallel")
        self.timeout = config.get("timeout_seconds", 30)
        self.default_limit = config.get("default_limit", 50)
        self.max_limit = config.get("max_limit", 100)

        suggestions_config = suggestions_config or {}
        self.suggestion_default_limit = suggestions_config.get("default_limit", 10)
        self.suggestion_max_limit = suggestions_config.get("max_limit", 50)
        self.known_statuses = list(suggestions_config.get("statuses", []))

        logger.info(
            f"SearchOrchestrator initialized with {len(adapters)} adapters "
            f"(mode: {self.execution_mode}, cache: {self.cache.enabled})"
        )

    def validate_options(self, options: SearchOptions) -> None:
        """
        Check numeric ranges and enumerations.

        Raises:
            InvalidSearchOptionsError: Naming the first offending field
        """
        if options.limit < 0:
            raise InvalidSearchOptionsError(
                "limit", options.limit, f"limit must be non-negative, got: {options.limit}"
            )
        if options.limit > self.max_limit:
            raise InvalidSearchOptionsError(
                "limit", options.limit, f"limit must not exceed {self.max_limit}, got: {options.limit}"
            )
        if options.offset < 0:
            raise InvalidSearchOptionsError(
                "offset", options.offset, f"offset must be non-negative, got: {options.offset}"
            )
        if options.sort_order and options.sort_order not in SORT_ORDERS:
            raise InvalidSearchOptionsError(
                "sort_order", options.sort_order,
                f"sort_order must be 'asc' or 'desc', got: {options.sort_order}"
            )
        if options.sort_by and options.sort_by not in SORT_FIELDS:
            raise InvalidSearchOptionsError(
                "sort_by", options.sort_by, f"invalid sort_by field: {options.sort_by}"
            )
        for entity_type in options.entity_types:
            if entity_type not in SEARCHABLE_ENTITY_TYPES:
                raise InvalidSearchOptionsError(
                    "entity_types", entity_type,
                    f"invalid entity_type: {entity_type}. "
                    f"Valid types are: {', '.join(SEARCHABLE_ENTITY_TYPES)}"
                )

    def apply_defaults(self, options: SearchOptions) -> SearchOptions:
        """Fill in default limit, sort field and sort order."""
        limit = options.limit
        if limit <= 0:
            limit = self.default_limit
        limit = min(limit, self.max_limit)

        return options.model_copy(update={
            "limit": limit,
            "sort_by": options.sort_by or DEFAULT_SORT_BY,
            "sort_order": options.sort_order or DEFAULT_SORT_ORDER,
        })

    async def search(self, options: SearchOptions) -> SearchResponse:
        """
        Execute a cross-entity search.

        Args:
            options: Search request

        Returns:
            SearchResponse (possibly served from cache)

        Raises:
            InvalidSearchOptionsError: Validation failed
            RetrievalFailedError: An adapter failed; nothing is cached
        """
        start_time = time.time()
        self.validate_options(options)

        cache_key = self.cache.build_key(options)
        cached = await self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Search cache hit: {cache_key}")
            return cached

        effective = self.apply_defaults(options)
        expression = prepare_query(effective.query)
        path = "ranked" if expression else "unranked"
        adapters = self._select_adapters(effective.entity_types)

        with log_context(search_path=path, cache_key=cache_key):
            logger.info(
                f"SearchOrchestrator executing {path} search across "
                f"{[a.get_name() for a in adapters]} "
                f"(limit={effective.limit}, offset={effective.offset}, mode={self.execution_mode})"
            )

            if self.execution_mode == "parallel":
                result_sets = await self._execute_parallel(adapters, expression, effective.filters)
            else:
                result_sets = await self._execute_sequential(adapters, expression, effective.filters)

            page = self.consolidator.consolidate(
                result_sets,
                sort_by=effective.sort_by,
                sort_order=effective.sort_order,
                limit=effective.limit,
                offset=effective.offset,
            )

            response = SearchResponse(
                results=page.results,
                total=page.total,
                limit=effective.limit,
                offset=effective.offset,
                query=options.query,
                executed_at=datetime.now(timezone.utc),
            )

            await self.cache.set(cache_key, response)

            execution_time_ms = (time.time() - start_time) * 1000
            logger.info(
                f"SearchOrchestrator completed: {page.total} results, "
                f"{len(page.results)} returned in {execution_time_ms:.2f}ms"
            )

        return response

    async def invalidate_all(self) -> int:
        """Drop every cached search response; returns the number removed."""
        return await self.cache.invalidate_all()

    def _select_adapters(self, entity_types: List[str]) -> List[EntitySearchAdapter]:
        """Adapters for the requested kinds (all kinds when none requested)."""
        wanted = entity_types or list(SEARCHABLE_ENTITY_TYPES)
        return [
            adapter for entity_type, adapter in self.adapters.items()
            if entity_type in wanted
        ]

    async def _retrieve(
        self,
        adapter: EntitySearchAdapter,
        expression: str,
        filters: SearchFilters
    ) -> List[SearchResult]:
        """Run one adapter under the configured timeout."""
        try:
            if expression:
                call = adapter.search(expression, filters)
            else:
                call = adapter.filter(filters)
            return await asyncio.wait_for(call, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Adapter {adapter.get_name()} timed out after {self.timeout}s")
            raise RetrievalFailedError(adapter.get_name()) from e

    async def _execute_parallel(
        self,
        adapters: List[EntitySearchAdapter],
        expression: str,
        filters: SearchFilters
    ) -> List[List[SearchResult]]:
        """Execute adapters concurrently; cancel the siblings on first failure."""
        tasks = [
            asyncio.create_task(self._retrieve(adapter, expression, filters))
            for adapter in adapters
        ]

        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _execute_sequential(
        self,
        adapters: List[EntitySearchAdapter],
        expression: str,
        filters: SearchFilters
    ) -> List[List[SearchResult]]:
        """Execute adapters one after another; stop at the first failure."""
        results = []
        for adapter in adapters:
            results.append(await self._retrieve(adapter, expression, filters))
        return results

    async def lookup_reference_id(self, reference_id: str) -> SearchResult:
        """
        Resolve a reference ID to its entity.

        Args:
            reference_id: e.g. "US-119" (case-insensitive, surrounding whitespace ignored)

        Returns:
            SearchResult with relevance 1.0

        Raises:
            InvalidSearchOptionsError: Input is not a reference ID
            EntityNotFoundError: No entity of that kind carries the ID
            RetrievalFailedError: Store failure
        """
        pattern = self.detector.detect(reference_id)
        if not pattern.is_reference_id:
            raise InvalidSearchOptionsError(
                "reference_id", reference_id, f"not a reference ID: {reference_id!r}"
            )

        canonical = self.detector.canonicalize(reference_id)
        adapter = self.adapters.get(pattern.entity_type)
        if adapter is None:
            raise EntityNotFoundError(pattern.entity_type, canonical)

        return await adapter.lookup(canonical)

    async def search_by_reference_id(self, reference_id: str) -> SearchResponse:
        """
        Reference ID lookup shaped as a SearchResponse.

        Non-reference input and unknown IDs yield an empty response.
        """
        results: List[SearchResult] = []
        try:
            results.append(await self.lookup_reference_id(reference_id))
        except InvalidSearchOptionsError:
            logger.debug(f"Query {reference_id!r} is not a reference ID")
        except EntityNotFoundError as e:
            logger.info(f"Reference lookup found nothing: {e}")

        return SearchResponse(
            results=results,
            total=len(results),
            limit=self.default_limit,
            offset=0,
            query=reference_id,
            executed_at=datetime.now(timezone.utc),
        )

    async def suggest(self, query: str, limit: int = 0) -> SearchSuggestions:
        """
        Typeahead suggestions for a partial query.

        Args:
            query: Partial query text (required)
            limit: Maximum suggestions per category; 0 uses the default

        Returns:
            SearchSuggestions with titles, reference IDs and known statuses

        Raises:
            InvalidSearchOptionsError: Query is blank
            RetrievalFailedError: Store failure
        """
        if not query.strip():
            raise InvalidSearchOptionsError("query", query, "query parameter is required")

        if limit <= 0:
            limit = self.suggestion_default_limit
        limit = min(limit, self.suggestion_max_limit)

        if self.detector.is_valid(query):
            try:
                match = await self.lookup_reference_id(query)
            except EntityNotFoundError:
                return SearchSuggestions(statuses=self.known_statuses)
            return SearchSuggestions(
                titles=[match.title],
                reference_ids=[match.reference_id],
                statuses=self.known_statuses,
            )

        response = await self.search(SearchOptions(query=query, limit=self.max_limit))

        titles: List[str] = []
        reference_ids: List[str] = []
        for result in response.results:
            if len(titles) < limit and result.title not in titles:
                titles.append(result.title)
            if len(reference_ids) < limit:
                reference_ids.append(result.reference_id)

        return SearchSuggestions(
            titles=titles,
            reference_ids=reference_ids,
            statuses=self.known_statuses,
        )
