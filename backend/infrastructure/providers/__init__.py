"""Infrastructure providers for application ports.

Canonical location for infra-side provider modules.
"""

__all__ = [
    "neo4jdb",
]
