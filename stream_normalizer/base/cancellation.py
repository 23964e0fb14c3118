"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` signals a stop request across threads;
``CancelledError`` is raised by the multiplexer loop when it observes one.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
