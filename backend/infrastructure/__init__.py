"""
Infrastructure layer (no memory-graph semantics).

Concrete adapters for application ports: env-backed connection settings and
the Neo4j driver provider.
"""

__all__ = [
    "config",
    "providers",
]
