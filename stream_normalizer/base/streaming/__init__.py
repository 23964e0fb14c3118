"""Streaming package for the base layer.

Exposes the canonical parsed-event types, the cancellable controller and
stream release helpers under a single namespace.
"""

from .events import (
    ParsedEvent,
    ReasoningDelta,
    ReasoningEnd,
    ReasoningStart,
    TextDelta,
    ToolInvocationStart,
    ToolResult,
)
from .stream_cleanup import register_stream_cleanup
from .stream_controller import StreamController
from .streaming_support import streaming_supported

__all__ = [
    "ParsedEvent",
    "TextDelta",
    "ReasoningStart",
    "ReasoningDelta",
    "ReasoningEnd",
    "ToolInvocationStart",
    "ToolResult",
    "StreamController",
    "register_stream_cleanup",
    "streaming_supported",
]
