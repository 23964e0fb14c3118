"""StreamController: a cancellable iterator facade over a multiplexer.

The HTTP layer (or any caller running the stream on a worker thread) holds
the controller, iterates it for wire fragments, and calls ``cancel`` when
its consumer goes away. Cancellation is cooperative: the multiplexer checks
the shared token between provider events and releases the provider stream.
"""
from __future__ import annotations

from contextlib import suppress
from typing import Iterator, Protocol, runtime_checkable

from ..cancellation import CancellationToken


@runtime_checkable
class _HasCancellationToken(Protocol):
    cancellation_token: CancellationToken | None


class StreamController:
    """High-level cancellable iterator wrapping a ``StreamMultiplexer``.

    Responsibilities:
      * Iterate over wire fragments (``str``) or encoded bytes.
      * Expose ``cancel(reason)`` for cooperative cancellation.
      * Close the underlying generator when the consumer stops early.
    """

    def __init__(
        self,
        multiplexer,  # untyped to avoid importing the normalizer package here
        token: CancellationToken | None = None,
    ) -> None:
        self._multiplexer = multiplexer
        self._token = token or CancellationToken()
        if isinstance(multiplexer, _HasCancellationToken) and multiplexer.cancellation_token is None:
            multiplexer.cancellation_token = self._token
        self._iterator: Iterator[str] | None = None
        self._finished = False

    def __iter__(self) -> Iterator[str]:
        self._iterator = self._multiplexer.run()
        try:
            yield from self._iterator
            self._finished = True
        finally:
            self.close()

    def iter_bytes(self, encoding: str = "utf-8") -> Iterator[bytes]:
        """Yield each wire fragment encoded as bytes."""
        for fragment in self:
            yield fragment.encode(encoding)

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation; safe to call repeatedly."""
        self._token.cancel(reason)

    def close(self) -> None:
        """Close the wrapped generator, releasing the provider stream."""
        if self._iterator is not None:
            with suppress(Exception):
                self._iterator.close()  # type: ignore[attr-defined]
            self._iterator = None

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def finished(self) -> bool:  # noqa: D401 - short property
        """Whether the stream ran to completion."""
        return self._finished


__all__ = ["StreamController"]
