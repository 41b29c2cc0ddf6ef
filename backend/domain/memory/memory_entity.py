from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

from memory_graph.config.settings import DEFAULT_LABEL
from memory_graph.cypher.statements import WriteMode


@dataclass(frozen=True)
class RelationshipSpec:
    """Directed edge request between two entities identified by `text`."""

    source: Optional[str] = None
    target: Optional[str] = None
    type: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.source and self.target and self.type)

    def as_descriptor(self) -> dict[str, Optional[str]]:
        return {"from": self.source, "to": self.target, "type": self.type}


@dataclass(frozen=True)
class MemoryWrite:
    """A single `/write` request after boundary validation."""

    text: str
    label: str = DEFAULT_LABEL
    context: Any = field(default_factory=dict)
    relationships: tuple[RelationshipSpec, ...] = ()
    mode: WriteMode = WriteMode.CREATE

    @classmethod
    def from_payload(
        cls,
        *,
        text: str,
        label: Optional[str] = None,
        context: Any = None,
        relationships: Optional[Iterable[Mapping[str, Any]]] = None,
        mode: Optional[str] = None,
    ) -> "MemoryWrite":
        specs = tuple(
            RelationshipSpec(source=r.get("from"), target=r.get("to"), type=r.get("type"))
            for r in (relationships or ())
        )
        return cls(
            text=text,
            label=label or DEFAULT_LABEL,
            context={} if context is None else context,
            relationships=specs,
            mode=WriteMode(mode or WriteMode.CREATE),
        )
