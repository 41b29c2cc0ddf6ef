from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from memory_graph.errors import UnknownPresetError

# Dashboard shortcuts for `/query`. Every preset takes a `$limit` parameter.
QUERY_PRESETS: Mapping[str, str] = MappingProxyType(
    {
        "getAllPersons": "MATCH (p:Person) RETURN p LIMIT $limit",
        "getAllCompanies": "MATCH (c:Company) RETURN c LIMIT $limit",
        "getGraphSnapshot": """
            MATCH (a)-[r]->(b)
            RETURN a, r, b
            LIMIT $limit
        """,
        "getInsights": """
            MATCH (i:Insight)-[rel]->(n)
            RETURN i, rel, n
            LIMIT $limit
        """,
    }
)


def resolve_preset(name: str) -> str:
    try:
        return QUERY_PRESETS[name]
    except KeyError:
        raise UnknownPresetError(name) from None


def preset_names() -> list[str]:
    return sorted(QUERY_PRESETS)
