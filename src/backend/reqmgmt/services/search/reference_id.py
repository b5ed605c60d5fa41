"""
Reference ID Recognizer

Classifies a free-form query as a typed reference identifier
(EP-001, US-119, REQ-045, AC-023, STD-012) or as free text.
"""

import re
from typing import Dict

from ...models.search import ReferenceIDPattern

# ASCII whitespace trimmed from both ends before matching
_ASCII_WHITESPACE = " \t\n\r\x0b\x0c"

# Prefix -> entity kind; the whole trimmed string must match
REFERENCE_ID_PATTERNS: Dict[str, "re.Pattern[str]"] = {
    "epic": re.compile(r"EP-([0-9]+)", re.IGNORECASE | re.ASCII),
    "user_story": re.compile(r"US-([0-9]+)", re.IGNORECASE | re.ASCII),
    "requirement": re.compile(r"REQ-([0-9]+)", re.IGNORECASE | re.ASCII),
    "acceptance_criteria": re.compile(r"AC-([0-9]+)", re.IGNORECASE | re.ASCII),
    "steering_document": re.compile(r"STD-([0-9]+)", re.IGNORECASE | re.ASCII),
}

# Canonical uppercase prefix for each kind
REFERENCE_ID_PREFIXES: Dict[str, str] = {
    "epic": "EP",
    "user_story": "US",
    "requirement": "REQ",
    "acceptance_criteria": "AC",
    "steering_document": "STD",
}


class ReferenceIDDetector:
    """Pure, stateless reference ID classifier."""

    def detect(self, query: str) -> ReferenceIDPattern:
        """
        Classify a query.

        Args:
            query: Raw user query, possibly padded with whitespace

        Returns:
            ReferenceIDPattern; ``original_query`` is always the untrimmed input
        """
        cleaned = query.strip(_ASCII_WHITESPACE)
        if not cleaned:
            return ReferenceIDPattern(is_reference_id=False, original_query=query)

        for entity_type, pattern in REFERENCE_ID_PATTERNS.items():
            match = pattern.fullmatch(cleaned)
            if match:
                return ReferenceIDPattern(
                    is_reference_id=True,
                    entity_type=entity_type,
                    number=match.group(1),
                    original_query=query,
                )

        return ReferenceIDPattern(is_reference_id=False, original_query=query)

    def is_valid(self, query: str) -> bool:
        """True if the query is a reference ID of any kind."""
        return self.detect(query).is_reference_id

    def entity_type_of(self, query: str) -> str:
        """Entity kind of a reference ID, or "" for anything else."""
        return self.detect(query).entity_type

    def canonicalize(self, query: str) -> str:
        """
        Canonical uppercase form of a reference ID (" ep-001 " -> "EP-001").

        Returns "" when the query is not a reference ID.
        """
        pattern = self.detect(query)
        if not pattern.is_reference_id:
            return ""
        return f"{REFERENCE_ID_PREFIXES[pattern.entity_type]}-{pattern.number}"


_detector = ReferenceIDDetector()


def detect(query: str) -> ReferenceIDPattern:
    """Module-level shortcut for ReferenceIDDetector.detect."""
    return _detector.detect(query)


def is_valid(query: str) -> bool:
    """Module-level shortcut for ReferenceIDDetector.is_valid."""
    return _detector.is_valid(query)


def entity_type_of(query: str) -> str:
    """Module-level shortcut for ReferenceIDDetector.entity_type_of."""
    return _detector.entity_type_of(query)
