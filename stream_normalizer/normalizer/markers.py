"""Wire marker formatting for the normalized output stream."""

from __future__ import annotations

import json
from typing import Iterable

from ..base.models import ProductLink

THINKING_START = "[THINKING:START]"
THINKING_CHUNK = "[THINKING:CHUNK]"
THINKING_END = "[THINKING:END]"


def status(stage: str) -> str:
    return f"[STATUS:{stage}]"


def thinking_chunk(text: str) -> str:
    return f"{THINKING_CHUNK}{text}"


def tool_start(name: str) -> str:
    return f"[TOOL:{name}:START]"


def tool_end(name: str) -> str:
    return f"[TOOL:{name}:END]"


def products(links: Iterable[ProductLink]) -> str:
    """Return the ``[PRODUCTS:...]`` marker carrying ``links`` as a JSON array."""
    payload = [link.to_dict() for link in links]
    return f"[PRODUCTS:{json.dumps(payload, ensure_ascii=False)}]"


__all__ = [
    "THINKING_START",
    "THINKING_CHUNK",
    "THINKING_END",
    "status",
    "thinking_chunk",
    "tool_start",
    "tool_end",
    "products",
]
