"""
Search data models

Value types exchanged between the search orchestrator, the per-entity
adapters, the cache and the HTTP layer. All models are frozen; the
orchestrator derives modified copies with ``model_copy(update=...)``.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# Entity kinds covered by cross-entity search, in adapter execution order
SEARCHABLE_ENTITY_TYPES = ("epic", "user_story", "acceptance_criteria", "requirement")

# Entity kinds the reference-ID recognizer knows about
REFERENCE_ENTITY_TYPES = SEARCHABLE_ENTITY_TYPES + ("steering_document",)

SORT_FIELDS = ("priority", "created_at", "updated_at", "title")
SORT_ORDERS = ("asc", "desc")

DEFAULT_SORT_BY = "created_at"
DEFAULT_SORT_ORDER = "desc"


class ReferenceIDPattern(BaseModel):
    """
    Outcome of classifying a query as a reference ID.

    When ``is_reference_id`` is true, ``entity_type`` and ``number`` are
    non-empty; otherwise both are empty strings.
    """
    model_config = ConfigDict(frozen=True)

    is_reference_id: bool = False
    entity_type: str = ""
    number: str = ""
    original_query: str = ""


class SearchFilters(BaseModel):
    """
    Structured filters; every present field is an AND predicate.

    Field applicability per entity kind:
        author_id                -> acceptance criteria only
        epic_id                  -> user stories only
        user_story_id            -> acceptance criteria, requirements
        acceptance_criteria_id   -> requirements only
        requirement_type_id      -> requirements only
    """
    model_config = ConfigDict(frozen=True)

    creator_id: Optional[UUID] = None
    assignee_id: Optional[UUID] = None
    priority: Optional[int] = None
    status: Optional[str] = None
    created_from: Optional[datetime] = None
    created_to: Optional[datetime] = None

    epic_id: Optional[UUID] = None
    user_story_id: Optional[UUID] = None
    acceptance_criteria_id: Optional[UUID] = None
    requirement_type_id: Optional[UUID] = None
    author_id: Optional[UUID] = None


class SearchOptions(BaseModel):
    """
    Full search request.

    Ranges and enumerations are checked by the orchestrator, not here, so an
    out-of-range value reaches validation and is reported with its field.
    """
    model_config = ConfigDict(frozen=True)

    query: str = ""
    entity_types: List[str] = Field(default_factory=list)
    filters: SearchFilters = Field(default_factory=SearchFilters)
    sort_by: str = ""
    sort_order: str = ""
    limit: int = 0
    offset: int = 0


class SearchResult(BaseModel):
    """Single hit from any entity kind, tagged by ``type``."""
    model_config = ConfigDict(frozen=True)

    id: UUID
    reference_id: str
    type: str  # epic, user_story, acceptance_criteria, requirement
    title: str
    description: Optional[str] = None
    priority: Optional[int] = None
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    relevance: Optional[float] = None  # set on the ranked path only


class SearchResponse(BaseModel):
    """Paginated search response; ``total`` is the pre-pagination count."""
    model_config = ConfigDict(frozen=True)

    results: List[SearchResult] = Field(default_factory=list)
    total: int = 0
    limit: int = 0
    offset: int = 0
    query: str = ""
    executed_at: datetime


class SearchSuggestions(BaseModel):
    """Typeahead suggestions grouped by category."""
    model_config = ConfigDict(frozen=True)

    titles: List[str] = Field(default_factory=list)
    reference_ids: List[str] = Field(default_factory=list)
    statuses: List[str] = Field(default_factory=list)
