"""Canonical data models (one dataclass family per module)."""

from .message import Message, Role
from .provider_kind import ProviderKind
from .normalize_request import NormalizeRequest
from .product_link import ExtractionResult, ProductLink
from .memory_directive import MEMORY_CATEGORIES, MemoryCategory, MemoryDirective

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
