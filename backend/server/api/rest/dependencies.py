from __future__ import annotations

from functools import lru_cache

from application.memory_builder import MemoryGraphService
from application.ports.graph_store_port import GraphStorePort
from config.settings import (
    MEMORY_GRAPH_DEFAULT_LIMIT,
    MEMORY_QUERY_DEFAULT_LIMIT,
    MEMORY_RELATIONSHIP_MATCH_LABEL,
)


@lru_cache(maxsize=1)
def _build_graph_store() -> GraphStorePort:
    from infrastructure.providers.neo4jdb import Neo4jGraphStore

    return Neo4jGraphStore.from_config()


def get_graph_store() -> GraphStorePort:
    return _build_graph_store()


def has_graph_store() -> bool:
    return _build_graph_store.cache_info().currsize > 0


def build_memory_graph_service(store: GraphStorePort) -> MemoryGraphService:
    return MemoryGraphService(
        store=store,
        relationship_match_label=MEMORY_RELATIONSHIP_MATCH_LABEL or None,
        query_default_limit=MEMORY_QUERY_DEFAULT_LIMIT,
        graph_default_limit=MEMORY_GRAPH_DEFAULT_LIMIT,
    )


def get_memory_graph_service() -> MemoryGraphService:
    """Service bound to the shared store handle (overridable in tests)."""
    return build_memory_graph_service(get_graph_store())


async def shutdown_dependencies() -> None:
    """Close the driver pool if one was ever created."""
    if not has_graph_store():
        return
    store = _build_graph_store()
    close = getattr(store, "close", None)
    if callable(close):
        close()
    _build_graph_store.cache_clear()
