from __future__ import annotations

from typing import Any

from memory_graph.config.settings import DESTRUCTIVE_KEYWORDS, MAX_QUERY_LIMIT
from memory_graph.errors import DestructiveQueryError, InvalidQueryError


def ensure_query_text(value: Any) -> str:
    if not value or not isinstance(value, str) or not value.strip():
        raise InvalidQueryError("Missing Cypher query or invalid type.")
    return value


def reject_destructive(cypher: str) -> None:
    """Refuse query text containing `delete`/`drop` anywhere, in any case.

    This is a substring check, not a parser: it also trips on identifiers such
    as `dropdown`, and it is not a security boundary.
    """
    lowered = cypher.lower()
    if any(keyword in lowered for keyword in DESTRUCTIVE_KEYWORDS):
        raise DestructiveQueryError(
            "Dangerous Cypher command detected. DELETE/DROP not allowed via API."
        )


def coerce_limit(value: Any, default: int) -> int:
    """Turn a caller supplied row limit into an int in [0, MAX_QUERY_LIMIT]."""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return default
    try:
        limit = int(value) if isinstance(value, int) else int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return default
    return min(max(0, limit), MAX_QUERY_LIMIT)
