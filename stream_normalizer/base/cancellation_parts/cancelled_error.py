"""Cancellation error type.

Raised when the multiplexer observes that its consumer asked it to stop.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when a stream is cancelled cooperatively.

    Distinguishes a consumer-initiated stop from upstream failures so the
    multiplexer can release the provider stream quietly instead of surfacing
    ``ProviderUnavailable``.
    """


__all__ = ["CancelledError"]
