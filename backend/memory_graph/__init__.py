"""
Memory Graph - Cypher translation core for the memory builder service.

The stable public import path is `memory_graph.*`. This package must not
import service layers (server/application/domain/infrastructure).
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple

__version__ = "0.1.0"

_LAZY_IMPORTS: Dict[str, Tuple[str, str]] = {
    # ============ 1. Statement building ============
    "Statement": ("memory_graph.cypher.statements", "Statement"),
    "WriteMode": ("memory_graph.cypher.statements", "WriteMode"),
    "build_entity_statement": ("memory_graph.cypher.statements", "build_entity_statement"),
    "build_relationship_statements": ("memory_graph.cypher.statements", "build_relationship_statements"),
    "resolve_preset": ("memory_graph.cypher.presets", "resolve_preset"),
    "sanitize_label": ("memory_graph.cypher.sanitize", "sanitize_label"),
    "sanitize_relationship_type": ("memory_graph.cypher.sanitize", "sanitize_relationship_type"),
    # ============ 2. Result normalization ============
    "format_records": ("memory_graph.normalize", "format_records"),
    "to_json_safe": ("memory_graph.normalize", "to_json_safe"),
    "assemble_snapshot": ("memory_graph.snapshot", "assemble_snapshot"),
}


def __getattr__(name: str) -> Any:
    if name not in _LAZY_IMPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_path, attr_name = _LAZY_IMPORTS[name]
    module = import_module(module_path)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> Any:
    return sorted(set(list(globals().keys()) + list(_LAZY_IMPORTS.keys())))


__all__ = ["__version__", *_LAZY_IMPORTS.keys()]
