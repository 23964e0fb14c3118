"""Cooperative cancellation token implementation.

A request handler (for example the HTTP layer noticing a client disconnect)
cancels the token from its own thread; the multiplexer polls it between
provider events and stops pulling.
"""

from __future__ import annotations

from threading import Lock

from .state import State
from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative, one-shot cancellation token.

    Thread-safe for ``cancel`` + ``raise_if_cancelled`` usage. The first
    ``cancel`` wins; later calls keep its reason.
    """

    def __init__(self) -> None:
        self._state = State()
        self._lock = Lock()

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation; repeated calls are no-ops."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "stream cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._state.cancelled}, reason={self._state.reason!r})"


__all__ = ["CancellationToken"]
