"""Memory store implementations."""

from .in_memory_store import InMemoryFactStore

__all__ = ["InMemoryFactStore"]
