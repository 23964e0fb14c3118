"""Release helpers for native provider streams."""

from __future__ import annotations

from contextlib import ExitStack, suppress


def register_stream_cleanup(stream, stack: ExitStack) -> None:
    """Register best-effort cleanup callbacks for the native stream.

    Both SDKs expose ``close()`` on their stream objects; plain iterables
    (tests, replayed fixtures) are left untouched.
    """
    close_fn = getattr(stream, "close", None)
    if callable(close_fn):
        def _safe_close():  # noqa: D401 - simple internal callback
            with suppress(Exception):
                close_fn()
        stack.callback(_safe_close)


__all__ = ["register_stream_cleanup"]
