"""
Side-channel extraction results.

`ProductLink` is one real link recovered from the stream; `ExtractionResult`
is the once-per-stream output of the Side-Channel Extractor.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ProductLink:
    """A link literally present in the final text, reasoning or tool results."""

    name: str
    url: str
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "url": self.url}
        if self.description:
            data["description"] = self.description
        return data


@dataclass
class ExtractionResult:
    """Links found after the stream closed, deduplicated by URL."""

    product_links: List[ProductLink] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.product_links

    def urls(self) -> List[str]:
        return [link.url for link in self.product_links]


__all__ = ["ProductLink", "ExtractionResult"]
