from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from memory_graph.cypher.sanitize import (
    quote_identifier,
    sanitize_label,
    sanitize_relationship_type,
)


class WriteMode(str, Enum):
    """How `/write` treats an entity whose `text` already exists under its label.

    - create: always insert a new node (duplicates allowed)
    - overwrite: merge by text, replace context/updatedAt on every call
    - skip: merge by text, leave an existing node untouched
    """

    CREATE = "create"
    OVERWRITE = "overwrite"
    SKIP = "skip"


@dataclass(frozen=True)
class Statement:
    text: str
    params: dict[str, Any] = field(default_factory=dict)


def serialize_context(value: Any) -> str:
    """Neo4j properties cannot hold nested maps; store context as JSON text."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def build_entity_statement(
    *,
    text: str,
    label: Optional[str],
    context: Any,
    mode: WriteMode | str,
    timestamp: str,
) -> Statement:
    node_label = quote_identifier(sanitize_label(label))
    params = {
        "text": text,
        "context": serialize_context(context),
        "timestamp": timestamp,
    }
    mode = WriteMode(mode)

    if mode is WriteMode.OVERWRITE:
        cypher = f"""
        MERGE (n:{node_label} {{text: $text}})
        ON CREATE SET n.createdAt = datetime($timestamp)
        SET n.context = $context,
            n.updatedAt = datetime($timestamp)
        RETURN elementId(n) AS nodeId
        """
    elif mode is WriteMode.SKIP:
        cypher = f"""
        MERGE (n:{node_label} {{text: $text}})
        ON CREATE SET n.context = $context,
                      n.createdAt = datetime($timestamp)
        RETURN elementId(n) AS nodeId
        """
    else:
        cypher = f"""
        CREATE (n:{node_label} {{text: $text, context: $context, createdAt: datetime($timestamp)}})
        RETURN elementId(n) AS nodeId
        """
    return Statement(text=cypher, params=params)


def build_relationship_statement(
    *,
    source: str,
    target: str,
    rel_type: str,
    timestamp: str,
    match_label: Optional[str] = None,
) -> Statement:
    safe_type = quote_identifier(sanitize_relationship_type(rel_type))
    match_label = (match_label or "").strip()
    node_label = f":{quote_identifier(sanitize_label(match_label))}" if match_label else ""
    cypher = f"""
    MATCH (a{node_label} {{text: $from}}), (b{node_label} {{text: $to}})
    MERGE (a)-[r:{safe_type}]->(b)
    ON CREATE SET r.createdAt = datetime($timestamp)
    RETURN elementId(r) AS relId
    """
    return Statement(
        text=cypher,
        params={"from": source, "to": target, "timestamp": timestamp},
    )


def build_relationship_statements(
    relationships: Iterable[Mapping[str, Any]],
    *,
    timestamp: str,
    match_label: Optional[str] = None,
) -> list[Statement]:
    """One statement per descriptor; incomplete descriptors are skipped silently."""
    statements: list[Statement] = []
    for rel in relationships or ():
        source = rel.get("from")
        target = rel.get("to")
        rel_type = rel.get("type")
        if not source or not target or not rel_type:
            continue
        statements.append(
            build_relationship_statement(
                source=source,
                target=target,
                rel_type=rel_type,
                timestamp=timestamp,
                match_label=match_label,
            )
        )
    return statements
