"""Interface Protocols (one per module)."""

from .memory_store import IMemoryStore
from .provider_adapter import ProviderAdapter

__all__ = ["IMemoryStore", "ProviderAdapter"]
