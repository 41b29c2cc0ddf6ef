"""Neo4j provider for the graph store port.

Canonical provider location. Built by `server.api.rest.dependencies` and
injected into handlers; there is no module-level driver.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional

from neo4j import Driver, GraphDatabase, Session
from neo4j.exceptions import DriverError, Neo4jError

from application.ports.graph_store_port import StatementResult
from infrastructure.config.settings import NEO4J_CONFIG
from memory_graph.errors import GraphStoreError

logger = logging.getLogger(__name__)

# The driver raises OverflowError/TypeError while packing parameters it cannot encode.
_STORE_ERRORS = (Neo4jError, DriverError, ValueError, OverflowError, TypeError)


def _store_error(exc: Exception) -> GraphStoreError:
    message = getattr(exc, "message", None) or str(exc) or exc.__class__.__name__
    return GraphStoreError(message)


class Neo4jSession:
    """Statement runner bound to one driver session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def run(self, cypher: str, params: Optional[Mapping[str, Any]] = None) -> StatementResult:
        try:
            result = self._session.run(cypher, dict(params or {}))
            records = list(result)
            counters = result.consume().counters
        except _STORE_ERRORS as exc:
            logger.warning("neo4j statement failed: %s", exc)
            raise _store_error(exc) from exc
        return StatementResult(
            records=records,
            nodes_created=counters.nodes_created,
            relationships_created=counters.relationships_created,
            properties_set=counters.properties_set,
        )


class Neo4jGraphStore:
    """Lazily connected driver wrapper; pooling is left to the driver."""

    def __init__(
        self,
        *,
        uri: str,
        username: str,
        password: str,
        database: str = "neo4j",
        max_pool_size: int = 10,
    ) -> None:
        self._uri = uri
        self._auth = (username, password)
        self._database = database
        self._max_pool_size = int(max_pool_size)
        self._driver: Driver | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]] = None) -> "Neo4jGraphStore":
        cfg = dict(NEO4J_CONFIG if config is None else config)
        return cls(
            uri=cfg["uri"],
            username=cfg.get("username", ""),
            password=cfg.get("password", ""),
            database=cfg.get("database") or "neo4j",
            max_pool_size=cfg.get("max_pool_size") or 10,
        )

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def database(self) -> str:
        return self._database

    def _get_driver(self) -> Driver:
        with self._lock:
            if self._driver is None:
                try:
                    self._driver = GraphDatabase.driver(
                        self._uri,
                        auth=self._auth,
                        max_connection_pool_size=self._max_pool_size,
                    )
                except _STORE_ERRORS as exc:
                    raise _store_error(exc) from exc
            return self._driver

    @contextmanager
    def session(self) -> Iterator[Neo4jSession]:
        driver = self._get_driver()
        try:
            raw = driver.session(database=self._database)
        except _STORE_ERRORS as exc:
            raise _store_error(exc) from exc
        try:
            yield Neo4jSession(raw)
        finally:
            raw.close()

    def verify_connectivity(self) -> None:
        driver = self._get_driver()
        try:
            driver.verify_connectivity()
        except _STORE_ERRORS as exc:
            raise _store_error(exc) from exc

    def close(self) -> None:
        with self._lock:
            driver, self._driver = self._driver, None
        if driver is not None:
            driver.close()
            logger.info("neo4j driver closed (%s)", self._uri)


__all__ = ["Neo4jGraphStore", "Neo4jSession"]
