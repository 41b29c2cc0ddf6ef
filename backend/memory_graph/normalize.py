from __future__ import annotations

import json
import math
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Mapping

from neo4j.graph import Node, Path, Relationship
from neo4j.spatial import Point

from memory_graph.config.settings import MAX_SAFE_INTEGER

RAW_FORMAT = "records"
JSON_FORMAT = "json"
RESULT_FORMATS = (RAW_FORMAT, JSON_FORMAT)


def record_to_dict(record: Any) -> dict[str, Any]:
    """Column name -> value for one result row.

    neo4j `Record.data()` already flattens graph types: nodes become their
    property maps, relationships `(start, TYPE, end)` tuples, paths lists.
    """
    data = getattr(record, "data", None)
    if callable(data):
        return data()
    return dict(record)


def to_json_safe(value: Any) -> Any:
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        return value if abs(value) <= MAX_SAFE_INTEGER else str(value)
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, (Node, Relationship)):
        return to_json_safe(dict(value.items()))
    if isinstance(value, Path):
        return {
            "nodes": [to_json_safe(n) for n in value.nodes],
            "relationships": [to_json_safe(r) for r in value.relationships],
        }
    if isinstance(value, Point):
        point = {"srid": value.srid, "x": value.x, "y": value.y}
        if len(value) > 2:
            point["z"] = value.z
        return point
    iso_format = getattr(value, "iso_format", None)
    if callable(iso_format):
        # neo4j.time Date/Time/DateTime/Duration
        return iso_format()
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, Mapping):
        return {str(k): to_json_safe(v) for k, v in value.items()}
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json_safe(v) for v in value]
    return str(value)


def decode_context(value: dict[str, Any]) -> dict[str, Any]:
    """JSON-decode `value["context"]` in place when it is a string."""
    raw = value.get("context")
    if isinstance(raw, str):
        try:
            value["context"] = json.loads(raw)
        except ValueError:
            pass
    return value


def _decoded(column: Any) -> Any:
    if isinstance(column, (Mapping, Node, Relationship)):
        return decode_context(dict(column.items()))
    return column


def format_records(records: Iterable[Any], fmt: str = RAW_FORMAT) -> list[dict[str, Any]]:
    rows = [record_to_dict(record) for record in records]
    if fmt == JSON_FORMAT:
        # Decode before conversion so integers inside `context` get the same
        # safe-integer treatment as top-level columns.
        rows = [{key: _decoded(column) for key, column in row.items()} for row in rows]
    return [to_json_safe(row) for row in rows]


def parse_context(value: Any) -> Any:
    """Context for visualization nodes: malformed strings become `{"raw": ...}`."""
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return {"raw": value}
    return value or {}
