"""Shared fakes for normalizer tests.

``FakeAdapter`` replays canonical events (or raw events through a custom
parser) and records whether the stream it handed out was closed, which is
how cancellation and release are asserted without a network.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Iterator, List, Optional

from stream_normalizer.base.models import Message, NormalizeRequest, ProviderKind
from stream_normalizer.base.streaming import ParsedEvent
from stream_normalizer.config.settings import NormalizerSettings

MARKER_RE = re.compile(r"\[(?:STATUS|TOOL|THINKING):[^\]]*\]")
WRAPPER_TAGS = ("email_copy", "clarification_request", "non_copy_response")


def make_request(**overrides: Any) -> NormalizeRequest:
    data = {
        "messages": [Message(role="user", content="Write a spring sale email")],
        "model": "claude-sonnet-4-5",
        "system_prompt": "You are an email copywriter.",
        "provider": ProviderKind.ANTHROPIC,
    }
    data |= overrides
    return NormalizeRequest(**data)


class RecordingStream:
    """Iterable raw stream that remembers whether ``close`` was called."""

    def __init__(self, items: Iterable[Any], fail_after: Optional[int] = None, error: Optional[Exception] = None):
        self._items = list(items)
        self._fail_after = fail_after
        self._error = error or RuntimeError("connection reset by peer")
        self.closed = False
        self.pulled = 0

    def __iter__(self) -> Iterator[Any]:
        for idx, item in enumerate(self._items):
            if self._fail_after is not None and idx == self._fail_after:
                raise self._error
            self.pulled += 1
            yield item
        if self._fail_after is not None and self._fail_after >= len(self._items):
            raise self._error

    def close(self) -> None:
        self.closed = True


class FakeAdapter:
    """``ProviderAdapter`` double replaying a fixed event list."""

    provider_name = "fake"

    def __init__(
        self,
        events: Iterable[Any],
        *,
        parser: Optional[Callable[[Any], Optional[ParsedEvent]]] = None,
        fail_after: Optional[int] = None,
        open_error: Optional[Exception] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self._events = list(events)
        self._parser = parser
        self._fail_after = fail_after
        self._open_error = open_error
        self._error = error
        self.stream: Optional[RecordingStream] = None

    def build_params(self, request: NormalizeRequest) -> dict:
        return {"model": request.model}

    def open_stream(self, request: NormalizeRequest) -> RecordingStream:
        if self._open_error is not None:
            raise self._open_error
        self.stream = RecordingStream(self._events, self._fail_after, self._error)
        return self.stream

    def parse_event(self, raw: Any) -> Optional[ParsedEvent]:
        if self._parser is not None:
            return self._parser(raw)
        return raw


def settings(**overrides: Any) -> NormalizerSettings:
    return NormalizerSettings(**overrides)


def strip_markers(wire: str) -> str:
    """Return the wire text with status, tool and thinking markers removed.

    Thinking chunk text stays in place; fixtures using this keep reasoning
    out of the stream.
    """
    return MARKER_RE.sub("", wire)


def statuses(wire: str) -> List[str]:
    return re.findall(r"\[STATUS:([a-z_]+)\]", wire)


def wrapper_counts(wire: str) -> dict:
    return {
        tag: (wire.count(f"<{tag}>"), wire.count(f"</{tag}>"))
        for tag in WRAPPER_TAGS
    }


def sdk_obj(**attrs: Any) -> Any:
    """Attribute-only stand-in for SDK model objects."""
    return type("_SdkObj", (), attrs)()
