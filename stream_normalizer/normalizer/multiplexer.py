"""Stream multiplexer: the single consuming loop of one normalized stream.

Pulls raw provider events through the adapter's parser, routes them to the
classifier, the status tracker and the side-channel buffers, and yields
wire fragments. ``run`` is a plain generator: the consumer pulls, so a slow
consumer suspends the provider loop, and closing the generator (or
cancelling the token) releases the provider stream.

Failure semantics
-----------------
- Upstream or parser errors force-close an open wrapper, then raise
  :class:`ProviderUnavailable` with a classified ``ErrorCode``.
- Cancellation stops pulling quietly; nothing further is written.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional

from ..base.cancellation import CancellationToken, CancelledError
from ..base.errors import ErrorCode, ProviderError, ProviderUnavailable, classify_exception, is_retryable
from ..base.factory import ProviderFactory
from ..base.interfaces import IMemoryStore, ProviderAdapter
from ..base.log_support import LogContext
from ..base.logging import get_logger, normalized_log_event
from ..base.models import NormalizeRequest
from ..base.streaming import (
    ParsedEvent,
    ReasoningDelta,
    ReasoningEnd,
    ReasoningStart,
    StreamController,
    TextDelta,
    ToolInvocationStart,
    ToolResult,
    register_stream_cleanup,
)
from ..config import get_normalizer_config
from ..config.defaults import WEB_SEARCH_TOOL_NAME
from ..config.settings import NormalizerSettings
from . import markers
from .classifier import ContentClassifier
from .extraction import SideChannelExtractor
from .heuristics import ClarificationPolicy
from .status import INITIAL_STAGE, SEARCHING_STAGE, THINKING_STAGE, StatusTracker
from .wrappers import WrapperKind

WRAPPER_TAGS = frozenset(t for k in WrapperKind for t in (k.open_tag, k.close_tag))


@dataclass
class _RunState:
    """Per-run routing state (thinking/tool bracketing and side channels)."""

    classifier: ContentClassifier
    tracker: StatusTracker
    in_thinking: bool = False
    open_tools: List[str] = field(default_factory=list)
    reasoning_parts: List[str] = field(default_factory=list)
    tool_parts: List[str] = field(default_factory=list)
    events: int = 0


class StreamMultiplexer:
    """Drive one provider stream into the normalized wire protocol.

    Args:
        adapter: Provider strategy used to open and parse the stream.
        request: The request to normalize.
        settings: Normalizer tunables (resolved from config when omitted).
        memory_store: Receives memory directives after the stream.
        cancellation_token: Cooperative stop signal; a
            :class:`StreamController` injects one when this is ``None``.
        policy: Clarification detection policy override.
    """

    def __init__(
        self,
        adapter: ProviderAdapter,
        request: NormalizeRequest,
        *,
        settings: Optional[NormalizerSettings] = None,
        memory_store: Optional[IMemoryStore] = None,
        cancellation_token: Optional[CancellationToken] = None,
        policy: Optional[ClarificationPolicy] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.adapter = adapter
        self.request = request
        self.settings = settings or get_normalizer_config()
        self.memory_store = memory_store
        self.cancellation_token = cancellation_token
        self.policy = policy
        self._logger = logger or get_logger("normalizer.multiplexer")
        self._ctx = LogContext(
            provider=adapter.provider_name,
            model=request.model,
            conversation_id=request.conversation_id,
        )
        self.last_state: Optional[_RunState] = None

    # ---- public iteration ----
    def run(self) -> Iterator[str]:
        """Yield wire fragments for the whole stream."""
        state = _RunState(
            classifier=ContentClassifier(self.settings, self.policy, logger=self._logger, ctx=self._ctx),
            tracker=StatusTracker(),
        )
        self.last_state = state
        normalized_log_event(self._logger, "stream.start", self._ctx, phase="start", attempt=1, emitted=False)
        yield markers.status(INITIAL_STAGE)

        with ExitStack() as stack:
            try:
                raw_stream = self.adapter.open_stream(self.request)
                register_stream_cleanup(raw_stream, stack)
                for raw in raw_stream:
                    self._raise_if_cancelled()
                    event = self.adapter.parse_event(raw)
                    if event is None:
                        continue
                    state.events += 1
                    yield from self._route(event, state)
                    if state.classifier.stop_streaming:
                        break
            except CancelledError as exc:
                normalized_log_event(
                    self._logger,
                    "stream.cancelled",
                    self._ctx,
                    phase="finalize",
                    error_code=ErrorCode.CANCELLED.value,
                    emitted=state.classifier.content_started,
                    reason=str(exc),
                )
                return
            except ProviderError as exc:
                yield from self._abort(state)
                raise self._as_unavailable(exc) from exc
            except Exception as exc:
                yield from self._abort(state)
                raise self._as_unavailable(exc) from exc

        yield from self._finalize(state)

    def iter_bytes(self, encoding: str = "utf-8") -> Iterator[bytes]:
        """Yield each wire fragment encoded as bytes."""
        for fragment in self.run():
            yield fragment.encode(encoding)

    # ---- routing ----
    def _route(self, event: ParsedEvent, state: _RunState) -> Iterator[str]:
        if isinstance(event, TextDelta):
            yield from self._close_thinking(state)
            out = state.classifier.feed(event.text)
            stage = self._observe_forwarded(state, out)
            if stage:
                normalized_log_event(self._logger, "stream.status", self._ctx, phase="stream", stage=stage)
                yield markers.status(stage)
            yield from out
        elif isinstance(event, ReasoningStart):
            yield from self._open_thinking(state)
        elif isinstance(event, ReasoningDelta):
            yield from self._open_thinking(state)
            state.reasoning_parts.append(event.text)
            yield markers.thinking_chunk(event.text)
        elif isinstance(event, ReasoningEnd):
            yield from self._close_thinking(state)
        elif isinstance(event, ToolInvocationStart):
            yield from self._close_thinking(state)
            normalized_log_event(self._logger, "stream.tool", self._ctx, phase="stream", tool=event.name, action="start")
            if event.name == WEB_SEARCH_TOOL_NAME:
                yield markers.status(SEARCHING_STAGE)
            state.open_tools.append(event.name)
            yield markers.tool_start(event.name)
        elif isinstance(event, ToolResult):
            if event.extracted_text:
                state.tool_parts.append(event.extracted_text)
            if event.name in state.open_tools:
                state.open_tools.remove(event.name)
                normalized_log_event(self._logger, "stream.tool", self._ctx, phase="stream", tool=event.name, action="end")
                yield markers.tool_end(event.name)

    @staticmethod
    def _observe_forwarded(state: _RunState, fragments: List[str]) -> Optional[str]:
        """Advance the tracker on email content forwarded by this delta."""
        if state.classifier.active_wrapper is not WrapperKind.EMAIL_COPY:
            return None
        content = "".join(f for f in fragments if f not in WRAPPER_TAGS)
        if not content:
            return None
        return state.tracker.observe(content)

    @staticmethod
    def _open_thinking(state: _RunState) -> Iterator[str]:
        if not state.in_thinking:
            state.in_thinking = True
            yield markers.status(THINKING_STAGE)
            yield markers.THINKING_START

    @staticmethod
    def _close_thinking(state: _RunState) -> Iterator[str]:
        if state.in_thinking:
            state.in_thinking = False
            yield markers.THINKING_END

    # ---- completion paths ----
    def _finalize(self, state: _RunState) -> Iterator[str]:
        yield from self._close_thinking(state)
        classifier = state.classifier
        clarified = classifier.stop_streaming
        if not clarified:
            for name in state.open_tools:
                yield markers.tool_end(name)
            state.open_tools.clear()
        yield from classifier.finish()
        # The fallback path may only now classify the reply as a clarification.
        clarified = classifier.stop_streaming

        extractor = SideChannelExtractor(
            self.memory_store,
            self.request.website_url,
            logger=self._logger,
            ctx=self._ctx,
        )
        final_text = classifier.final_text
        extractor.save_directives(final_text, self.request.conversation_id)
        links = 0
        if not clarified:
            result = extractor.extract_links(final_text, "".join(state.reasoning_parts), "\n".join(state.tool_parts))
            links = len(result.product_links)
            if not result.is_empty():
                yield markers.products(result.product_links)
        normalized_log_event(
            self._logger,
            "stream.end",
            self._ctx,
            phase="finalize",
            emitted=classifier.content_started,
            wrapper=classifier.active_wrapper.value if classifier.active_wrapper else None,
            trimmed=classifier.state.trimmed_char_count,
            events=state.events,
            links=links,
        )

    def _abort(self, state: _RunState) -> Iterator[str]:
        yield from self._close_thinking(state)
        yield from state.classifier.abort()

    def _as_unavailable(self, exc: Exception) -> ProviderUnavailable:
        if isinstance(exc, ProviderUnavailable):
            err = exc
        else:
            code = classify_exception(exc)
            err = ProviderUnavailable(
                code=code,
                message=getattr(exc, "message", None) or str(exc),
                provider=self.adapter.provider_name,
                model=self.request.model,
                retryable=is_retryable(code),
                raw=exc,
            )
        normalized_log_event(
            self._logger,
            "stream.error",
            self._ctx,
            phase="stream",
            level=logging.ERROR,
            error_code=err.code.value,
            emitted=self.last_state.classifier.content_started if self.last_state else False,
            error=err.message,
        )
        return err

    def _raise_if_cancelled(self) -> None:
        if self.cancellation_token is not None:
            self.cancellation_token.raise_if_cancelled()


def normalize_stream(
    request: NormalizeRequest,
    *,
    adapter: Optional[ProviderAdapter] = None,
    memory_store: Optional[IMemoryStore] = None,
    settings: Optional[NormalizerSettings] = None,
    token: Optional[CancellationToken] = None,
    **adapter_kwargs: Any,
) -> StreamController:
    """Return a cancellable controller streaming ``request`` normalized.

    When ``adapter`` is omitted it is created through
    :class:`ProviderFactory` from ``request.provider``.
    """
    settings = settings or get_normalizer_config()
    if adapter is None:
        adapter = ProviderFactory.create(request.provider, settings=settings, **adapter_kwargs)
    multiplexer = StreamMultiplexer(adapter, request, settings=settings, memory_store=memory_store)
    return StreamController(multiplexer, token)


__all__ = ["StreamMultiplexer", "normalize_stream"]
