"""
Full-text Query Builder

Turns a user query into the PostgreSQL tsquery expression used by the
ranked retrieval path: every whitespace-separated token becomes a prefix
match and tokens are AND-ed together.

    "payment  gateway" -> "payment:* & gateway:*"

The expression is handed verbatim to the repository, which binds it as a
parameter of to_tsquery().
"""

PREFIX_MATCH_MARKER = ":*"
AND_OPERATOR = " & "


def prepare_query(query: str) -> str:
    """
    Build the prefix-match conjunction for a query.

    Args:
        query: Raw user query

    Returns:
        tsquery expression, or "" when the query is blank
    """
    cleaned = query.strip()
    if not cleaned:
        return ""

    tokens = cleaned.split()
    return AND_OPERATOR.join(f"{token}{PREFIX_MATCH_MARKER}" for token in tokens)
