"""Canonical models public surface.

Re-exports the dataclasses defined under ``models_parts`` so callers can
import them from ``stream_normalizer.base.models``.
"""

from .models_parts import (
    MEMORY_CATEGORIES,
    ExtractionResult,
    MemoryCategory,
    MemoryDirective,
    Message,
    NormalizeRequest,
    ProductLink,
    ProviderKind,
    Role,
)

__all__ = [
    "Message",
    "Role",
    "ProviderKind",
    "NormalizeRequest",
    "ProductLink",
    "ExtractionResult",
    "MemoryDirective",
    "MemoryCategory",
    "MEMORY_CATEGORIES",
]
