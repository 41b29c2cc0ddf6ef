from application.memory_builder.service import MemoryGraphService

__all__ = ["MemoryGraphService"]
