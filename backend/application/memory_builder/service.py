from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from application.ports.graph_store_port import GraphStorePort, StatementResult
from domain.memory import MemoryWrite
from memory_graph.config.settings import DEFAULT_GRAPH_LIMIT, DEFAULT_QUERY_LIMIT
from memory_graph.cypher.guard import coerce_limit, ensure_query_text, reject_destructive
from memory_graph.cypher.presets import resolve_preset
from memory_graph.cypher.sanitize import sanitize_label
from memory_graph.cypher.statements import (
    WriteMode,
    build_entity_statement,
    build_relationship_statements,
)
from memory_graph.errors import GraphStoreError
from memory_graph.normalize import RAW_FORMAT, format_records, to_json_safe
from memory_graph.snapshot import assemble_snapshot, build_snapshot_statement

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


def _first_value(result: StatementResult, key: str) -> Any:
    if not result.records:
        return None
    return to_json_safe(result.records[0].get(key))


class MemoryGraphService:
    """Request-to-Cypher translation for the memory builder endpoints.

    The store handle is injected; one scoped session is opened per call and
    closed on exit. Nothing here retries: store failures surface as
    `GraphStoreError` and the caller owns retry policy.
    """

    def __init__(
        self,
        *,
        store: GraphStorePort,
        relationship_match_label: Optional[str] = None,
        query_default_limit: int = DEFAULT_QUERY_LIMIT,
        graph_default_limit: int = DEFAULT_GRAPH_LIMIT,
        clock: Callable[[], str] = utc_timestamp,
    ) -> None:
        self._store = store
        self._relationship_match_label = relationship_match_label or None
        self._query_default_limit = int(query_default_limit)
        self._graph_default_limit = int(graph_default_limit)
        self._clock = clock

    def write(self, request: MemoryWrite) -> Dict[str, Any]:
        timestamp = self._clock()
        label = sanitize_label(request.label)
        entity = build_entity_statement(
            text=request.text,
            label=label,
            context=request.context,
            mode=request.mode,
            timestamp=timestamp,
        )
        relationships = build_relationship_statements(
            [spec.as_descriptor() for spec in request.relationships],
            timestamp=timestamp,
            match_label=self._relationship_match_label,
        )

        with self._store.session() as session:
            result = session.run(entity.text, entity.params)
            if request.mode is WriteMode.SKIP and result.nodes_created == 0:
                logger.info("skip mode: %s:%s already exists", label, request.text)
                return {"status": "skipped", "node": request.text}

            node_id = _first_value(result, "nodeId")
            # Sequential and not atomic with the entity write: a failure here
            # leaves the earlier statements applied.
            for statement in relationships:
                session.run(statement.text, statement.params)

        return {
            "status": "ok",
            "label": label,
            "mode": request.mode.value,
            "nodeId": node_id,
        }

    def query(
        self,
        *,
        cypher: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
        fmt: str = RAW_FORMAT,
        preset: Optional[str] = None,
        limit: Any = None,
    ) -> Dict[str, Any]:
        final_cypher: Any = cypher
        if not final_cypher and preset:
            final_cypher = resolve_preset(preset)
        final_cypher = ensure_query_text(final_cypher)
        reject_destructive(final_cypher)

        run_params = dict(params or {})
        run_params["limit"] = coerce_limit(limit, self._query_default_limit)

        with self._store.session() as session:
            result = session.run(final_cypher, run_params)

        results = format_records(result.records, fmt)
        return {
            "status": "ok",
            "records": len(results),
            "format": fmt,
            "preset": preset or "custom",
            "results": results,
        }

    def snapshot(self, *, limit: Any = None, filter_label: Optional[str] = None) -> Dict[str, Any]:
        statement = build_snapshot_statement(
            limit=coerce_limit(limit, self._graph_default_limit),
            filter_label=filter_label,
        )
        with self._store.session() as session:
            result = session.run(statement.text, statement.params)
        return {"status": "ok", **assemble_snapshot(result.records)}

    def health(self) -> Dict[str, Any]:
        try:
            self._store.verify_connectivity()
        except GraphStoreError as exc:
            logger.warning("neo4j connectivity check failed: %s", exc.message)
            return {"status": "error", "error": exc.message}
        return {"status": "ok"}
