from __future__ import annotations

from infrastructure.config.settings import NEO4J_CONFIG  # noqa: F401

__all__ = [
    "NEO4J_CONFIG",
]
