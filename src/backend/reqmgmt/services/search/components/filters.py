"""
Filter Predicate Set

Maps SearchFilters onto per-entity predicate fragments. Only the fields
meaningful to an entity kind are applied; the rest are ignored. All
predicates are AND-composed by the repository.
"""

import operator
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from ....models.search import SearchFilters

EQ = "eq"
GTE = "gte"
LTE = "lte"

OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    EQ: operator.eq,
    GTE: operator.ge,
    LTE: operator.le,
}

# filter field -> (column, operator), shared by every kind that has the column
_OWNED_FILTERS: Tuple[Tuple[str, str, str], ...] = (
    ("creator_id", "creator_id", EQ),
    ("assignee_id", "assignee_id", EQ),
    ("priority", "priority", EQ),
    ("status", "status", EQ),
    ("created_from", "created_at", GTE),
    ("created_to", "created_at", LTE),
)

_CREATED_RANGE: Tuple[Tuple[str, str, str], ...] = (
    ("created_from", "created_at", GTE),
    ("created_to", "created_at", LTE),
)

FILTER_MAPPINGS: Dict[str, Tuple[Tuple[str, str, str], ...]] = {
    "epic": _OWNED_FILTERS,
    "user_story": _OWNED_FILTERS + (
        ("epic_id", "epic_id", EQ),
    ),
    "acceptance_criteria": (
        ("author_id", "author_id", EQ),
    ) + _CREATED_RANGE + (
        ("user_story_id", "user_story_id", EQ),
    ),
    "requirement": _OWNED_FILTERS + (
        ("user_story_id", "user_story_id", EQ),
        ("acceptance_criteria_id", "acceptance_criteria_id", EQ),
        ("requirement_type_id", "type_id", EQ),
    ),
}


@dataclass(frozen=True)
class FilterPredicate:
    """
    One ``column <op> value`` fragment.

    Attributes:
        column: Entity attribute / table column name
        op: One of "eq", "gte", "lte"
        value: Comparison value taken from SearchFilters
    """
    column: str
    op: str
    value: Any

    def to_clause(self, model):
        """Render as a SQLAlchemy boolean clause against an ORM model."""
        return OPERATORS[self.op](getattr(model, self.column), self.value)

    def evaluate(self, candidate: Any) -> bool:
        """Apply the predicate to a column value held in memory."""
        if candidate is None:
            return False
        return bool(OPERATORS[self.op](candidate, self.value))


def build_predicates(entity_type: str, filters: SearchFilters) -> List[FilterPredicate]:
    """
    Translate filters into predicates for one entity kind.

    Args:
        entity_type: epic, user_story, acceptance_criteria or requirement
        filters: Structured filters from the search options

    Returns:
        Predicates for every present field that applies to the kind

    Raises:
        KeyError: If the entity kind is unknown
    """
    predicates = []
    for field_name, column, op in FILTER_MAPPINGS[entity_type]:
        value = getattr(filters, field_name)
        if value is not None:
            predicates.append(FilterPredicate(column=column, op=op, value=value))
    return predicates
