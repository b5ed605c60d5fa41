"""
Search error types

SearchError
├── InvalidSearchOptionsError  - option validation failed (client error)
├── RetrievalFailedError       - an entity adapter or its store call failed (server error)
└── EntityNotFoundError        - reference ID lookup found no entity
"""

from typing import Any


class SearchError(Exception):
    """Base class for errors surfaced by the search core."""


class InvalidSearchOptionsError(SearchError):
    """Raised when a search option is out of range or not in its enumeration."""

    def __init__(self, field: str, value: Any, message: str):
        self.field = field
        self.value = value
        self.message = message
        super().__init__(f"invalid search options: {message}")


class RetrievalFailedError(SearchError):
    """
    Raised when retrieval for one entity kind fails.

    The message names the kind only; store details stay in the logs.
    """

    def __init__(self, entity_type: str):
        self.entity_type = entity_type
        super().__init__(f"{entity_type} retrieval failed")


class EntityNotFoundError(SearchError):
    """Raised when no entity matches a reference ID."""

    def __init__(self, entity_type: str, reference_id: str):
        self.entity_type = entity_type
        self.reference_id = reference_id
        super().__init__(f"{entity_type} {reference_id} not found")
