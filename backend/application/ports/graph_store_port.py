from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ContextManager, Mapping, Optional, Protocol, Sequence


@dataclass(frozen=True)
class StatementResult:
    """Records plus the write counters reported by the store."""

    records: Sequence[Mapping[str, Any]] = ()
    nodes_created: int = 0
    relationships_created: int = 0
    properties_set: int = 0


class GraphSessionPort(Protocol):
    def run(self, cypher: str, params: Optional[Mapping[str, Any]] = None) -> StatementResult:
        """Execute one statement in its own auto-commit transaction."""
        ...


class GraphStorePort(Protocol):
    def session(self) -> ContextManager[GraphSessionPort]:
        """Scoped session; released on exit whether or not the body raised."""
        ...

    def verify_connectivity(self) -> None:
        ...

    def close(self) -> None:
        ...
