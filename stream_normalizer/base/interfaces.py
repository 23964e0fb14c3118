"""Interfaces public surface.

Re-exports the runtime-checkable Protocols defined under
``interfaces_parts``.
"""

from .interfaces_parts import IMemoryStore, ProviderAdapter

__all__ = ["IMemoryStore", "ProviderAdapter"]
