"""A "save this fact" directive found in the final response text."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args

MemoryCategory = Literal[
    "user_preference",
    "brand_context",
    "campaign_info",
    "product_details",
    "decision",
    "fact",
]

MEMORY_CATEGORIES = frozenset(get_args(MemoryCategory))


@dataclass(frozen=True)
class MemoryDirective:
    """One ``[REMEMBER:key=value:category]`` instruction."""

    key: str
    value: str
    category: str = "fact"


__all__ = ["MemoryDirective", "MemoryCategory", "MEMORY_CATEGORIES"]
