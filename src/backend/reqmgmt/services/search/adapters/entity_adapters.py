"""
Per-entity retrieval adapters.

Epics, user stories and requirements share a row shape (title, priority,
status). Acceptance criteria have none of those: the reference ID stands in
as title and status is reported as "active".
"""

from typing import Any, Optional

from ....models.search import SearchResult
from .base import EntitySearchAdapter

ACCEPTANCE_CRITERIA_STATUS = "active"


class TitledEntityAdapter(EntitySearchAdapter):
    """Adapter for entity kinds with title, priority and status columns."""

    def to_result(self, entity: Any, relevance: Optional[float] = None) -> SearchResult:
        return SearchResult(
            id=entity.id,
            reference_id=entity.reference_id,
            type=self.entity_type,
            title=entity.title,
            description=entity.description,
            priority=entity.priority,
            status=str(entity.status),
            created_at=entity.created_at,
            updated_at=getattr(entity, "updated_at", None),
            relevance=relevance,
        )


class EpicSearchAdapter(TitledEntityAdapter):
    entity_type = "epic"


class UserStorySearchAdapter(TitledEntityAdapter):
    entity_type = "user_story"


class RequirementSearchAdapter(TitledEntityAdapter):
    entity_type = "requirement"


class AcceptanceCriteriaSearchAdapter(EntitySearchAdapter):
    entity_type = "acceptance_criteria"

    def to_result(self, entity: Any, relevance: Optional[float] = None) -> SearchResult:
        return SearchResult(
            id=entity.id,
            reference_id=entity.reference_id,
            type=self.entity_type,
            title=entity.reference_id,
            description=entity.description,
            priority=None,
            status=ACCEPTANCE_CRITERIA_STATUS,
            created_at=entity.created_at,
            updated_at=getattr(entity, "updated_at", None),
            relevance=relevance,
        )


def build_adapters(repositories) -> dict:
    """
    Create the adapter for every searchable kind.

    Args:
        repositories: Object exposing epic, user_story, acceptance_criteria
            and requirement repositories

    Returns:
        Dict of {entity_type: adapter} in execution order
    """
    adapters = [
        EpicSearchAdapter(repositories.epic),
        UserStorySearchAdapter(repositories.user_story),
        AcceptanceCriteriaSearchAdapter(repositories.acceptance_criteria),
        RequirementSearchAdapter(repositories.requirement),
    ]
    return {adapter.entity_type: adapter for adapter in adapters}
