from domain.memory.memory_entity import MemoryWrite, RelationshipSpec

__all__ = ["MemoryWrite", "RelationshipSpec"]
