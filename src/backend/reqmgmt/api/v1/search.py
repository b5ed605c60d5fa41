"""
Search API Endpoints
GET  /api/v1/search                          - Cross-entity search
GET  /api/v1/search/suggestions              - Typeahead suggestions
GET  /api/v1/search/reference/{reference_id} - Reference ID lookup
GET  /api/v1/search/reference/{reference_id}/entity - Single entity by reference ID
POST /api/v1/search/cache/invalidate         - Drop cached search responses
"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from ...models.search import (
    SearchFilters,
    SearchOptions,
    SearchResponse,
    SearchResult,
    SearchSuggestions,
)
from ...services.search.errors import (
    EntityNotFoundError,
    InvalidSearchOptionsError,
    RetrievalFailedError,
)
from ...services.search.orchestrator import SearchOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/search", tags=["search"])


# Dependency injection placeholder (overridden in main.py)
def get_search_orchestrator_dep() -> SearchOrchestrator:
    """Dependency injection placeholder for search orchestrator - overridden in main.py"""
    raise RuntimeError("Search orchestrator dependency not initialized")


def _invalid_options(e: InvalidSearchOptionsError) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={"error": {"code": "INVALID_SEARCH_OPTIONS", "message": e.message, "field": e.field}}
    )


def _search_failed(e: RetrievalFailedError) -> HTTPException:
    return HTTPException(
        status_code=500,
        detail={"error": {"code": "SEARCH_FAILED", "message": str(e)}}
    )


def _not_found(e: EntityNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={"error": {"code": "ENTITY_NOT_FOUND", "message": str(e)}}
    )


@router.get("", response_model=SearchResponse)
async def search(
    query: str = "",
    entity_types: List[str] = Query(default=[]),
    sort_by: str = "",
    sort_order: str = "",
    limit: int = 0,
    offset: int = 0,
    creator_id: Optional[UUID] = None,
    assignee_id: Optional[UUID] = None,
    priority: Optional[int] = None,
    status: Optional[str] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    epic_id: Optional[UUID] = None,
    user_story_id: Optional[UUID] = None,
    acceptance_criteria_id: Optional[UUID] = None,
    requirement_type_id: Optional[UUID] = None,
    author_id: Optional[UUID] = None,
    orchestrator: SearchOrchestrator = Depends(get_search_orchestrator_dep)
):
    """
    Search epics, user stories, acceptance criteria and requirements.

    Example:
        GET /api/v1/search?query=gateway&sort_by=priority&sort_order=asc&limit=10

        Response:
        {
            "results": [{"id": "...", "reference_id": "EP-001", "type": "epic", ...}],
            "total": 1,
            "limit": 10,
            "offset": 0,
            "query": "gateway",
            "executed_at": "2025-01-28T10:30:00Z"
        }
    """
    options = SearchOptions(
        query=query,
        entity_types=entity_types,
        filters=SearchFilters(
            creator_id=creator_id,
            assignee_id=assignee_id,
            priority=priority,
            status=status,
            created_from=created_from,
            created_to=created_to,
            epic_id=epic_id,
            user_story_id=user_story_id,
            acceptance_criteria_id=acceptance_criteria_id,
            requirement_type_id=requirement_type_id,
            author_id=author_id,
        ),
        sort_by=sort_by,
        sort_order=sort_order,
        limit=limit,
        offset=offset,
    )

    try:
        return await orchestrator.search(options)
    except InvalidSearchOptionsError as e:
        logger.info(f"Rejected search options: {e.message}")
        raise _invalid_options(e)
    except RetrievalFailedError as e:
        logger.error(f"Search failed: {e}")
        raise _search_failed(e)


@router.get("/suggestions", response_model=SearchSuggestions)
async def suggestions(
    query: str = "",
    limit: int = 0,
    orchestrator: SearchOrchestrator = Depends(get_search_orchestrator_dep)
):
    """
    Typeahead suggestions for a partial query.

    Example:
        GET /api/v1/search/suggestions?query=auth&limit=5
    """
    try:
        return await orchestrator.suggest(query, limit)
    except InvalidSearchOptionsError as e:
        raise _invalid_options(e)
    except RetrievalFailedError as e:
        logger.error(f"Suggestions failed: {e}")
        raise _search_failed(e)


@router.get("/reference/{reference_id}", response_model=SearchResponse)
async def search_by_reference(
    reference_id: str,
    orchestrator: SearchOrchestrator = Depends(get_search_orchestrator_dep)
):
    """
    Look up a single entity by reference ID (e.g. US-119).

    Unknown or malformed IDs return an empty result list.
    """
    try:
        return await orchestrator.search_by_reference_id(reference_id)
    except RetrievalFailedError as e:
        logger.error(f"Reference lookup failed for {reference_id}: {e}")
        raise _search_failed(e)


@router.get("/reference/{reference_id}/entity", response_model=SearchResult)
async def lookup_reference(
    reference_id: str,
    orchestrator: SearchOrchestrator = Depends(get_search_orchestrator_dep)
):
    """Resolve a reference ID to exactly one entity; 404 when absent."""
    try:
        return await orchestrator.lookup_reference_id(reference_id)
    except InvalidSearchOptionsError as e:
        raise _invalid_options(e)
    except EntityNotFoundError as e:
        raise _not_found(e)
    except RetrievalFailedError as e:
        logger.error(f"Reference lookup failed for {reference_id}: {e}")
        raise _search_failed(e)


@router.post("/cache/invalidate")
async def invalidate_cache(
    orchestrator: SearchOrchestrator = Depends(get_search_orchestrator_dep)
):
    """
    Drop every cached search response.

    Example:
        POST /api/v1/search/cache/invalidate

        Response:
        {"invalidated": 12}
    """
    invalidated = await orchestrator.invalidate_all()
    return {"invalidated": invalidated}
