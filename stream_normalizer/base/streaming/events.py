"""Canonical parsed events.

Each Chunk Parser maps one raw provider event to at most one of these
frozen dataclasses. Reasoning and visible text never share an event.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union


@dataclass(frozen=True)
class TextDelta:
    """Plain content text to classify and forward."""

    text: str


@dataclass(frozen=True)
class ReasoningStart:
    """The model opened a thinking block."""


@dataclass(frozen=True)
class ReasoningDelta:
    """A fragment of the model's thinking trace (never classified)."""

    text: str


@dataclass(frozen=True)
class ReasoningEnd:
    """A content block closed; ends the thinking block if one is open."""


@dataclass(frozen=True)
class ToolInvocationStart:
    """The model started invoking an external capability such as web search."""

    name: str
    input: Optional[Mapping[str, Any]] = field(default=None, compare=False)


@dataclass(frozen=True)
class ToolResult:
    """Result of a tool invocation, flattened to free text for link extraction."""

    name: str
    extracted_text: str = ""


ParsedEvent = Union[
    TextDelta,
    ReasoningStart,
    ReasoningDelta,
    ReasoningEnd,
    ToolInvocationStart,
    ToolResult,
]
"""Exactly one canonical event; parsers return ``None`` for the empty case."""


__all__ = [
    "ParsedEvent",
    "TextDelta",
    "ReasoningStart",
    "ReasoningDelta",
    "ReasoningEnd",
    "ToolInvocationStart",
    "ToolResult",
]
