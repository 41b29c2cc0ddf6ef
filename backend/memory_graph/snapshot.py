from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from memory_graph.config.settings import FALLBACK_NODE_LABEL
from memory_graph.cypher.sanitize import quote_identifier, sanitize_label
from memory_graph.cypher.statements import Statement
from memory_graph.normalize import parse_context, to_json_safe


def build_snapshot_statement(*, limit: int, filter_label: Optional[str] = None) -> Statement:
    filter_label = (filter_label or "").strip()
    label_filter = f":{quote_identifier(sanitize_label(filter_label))}" if filter_label else ""
    cypher = f"""
    MATCH (a{label_filter})-[r]->(b)
    RETURN a, labels(a) AS aLabels, type(r) AS relType, b, labels(b) AS bLabels
    LIMIT $limit
    """
    return Statement(text=cypher, params={"limit": limit})


def _properties(value: Any) -> dict[str, Any]:
    if value is None:
        return {}
    items = getattr(value, "items", None)
    if callable(items):
        return dict(items())
    return {}


def _first_label(labels: Any) -> str:
    for label in labels or ():
        if label:
            return str(label)
    return FALLBACK_NODE_LABEL


def _node_entry(props: Mapping[str, Any], labels: Any) -> dict[str, Any]:
    text = to_json_safe(props.get("text"))
    return {
        "id": text,
        "label": _first_label(labels),
        "text": text,
        "context": to_json_safe(parse_context(props.get("context"))),
    }


def assemble_snapshot(records: Iterable[Mapping[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    """Collapse `(a)-[r]->(b)` rows into visualization nodes and links.

    Nodes are keyed by their `text` value; the first occurrence wins and the
    order of first appearance is kept. Every row yields exactly one link.
    """
    nodes: dict[Any, dict[str, Any]] = {}
    links: list[dict[str, Any]] = []

    for record in records:
        source = _properties(record["a"])
        target = _properties(record["b"])
        source_entry = _node_entry(source, record.get("aLabels"))
        target_entry = _node_entry(target, record.get("bLabels"))

        nodes.setdefault(source_entry["id"], source_entry)
        nodes.setdefault(target_entry["id"], target_entry)
        links.append(
            {
                "source": source_entry["id"],
                "target": target_entry["id"],
                "type": record["relType"],
            }
        )

    return {"nodes": list(nodes.values()), "links": links}
