"""Streaming response normalizer for Anthropic and OpenAI chat streams.

Turns either provider's raw event stream into one canonical text stream:
status, thinking and tool markers interleaved with content wrapped as
``<email_copy>``, ``<clarification_request>`` or ``<non_copy_response>``,
followed by an optional ``[PRODUCTS:...]`` marker.
"""

from .base.models import Message, NormalizeRequest, ProviderKind
from .normalizer import StreamMultiplexer, normalize_stream

__version__ = "0.1.0"

__all__ = [
    "Message",
    "NormalizeRequest",
    "ProviderKind",
    "StreamMultiplexer",
    "normalize_stream",
    "__version__",
]
