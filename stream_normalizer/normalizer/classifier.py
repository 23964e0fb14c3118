"""Content classifier: the per-stream wrapper state machine.

States: preamble -> one of {email_copy, clarification_request,
non_copy_response} -> closed.

While in preamble, text is buffered (bounded by ``preamble_cap``) and
tested on every delta: first for a clarification request, then for the
start of deliverable content. Once a wrapper is chosen every later delta
is forwarded until the wrapper closes, less any stray in-band wrapper
tags. ``finish`` applies the fallback classification and closes whatever
is still open; ``abort`` force-closes on error.

All state lives in one :class:`ClassifierState` owned by the instance, so
each stream gets its own classifier and nothing is shared.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Pattern

from ..base.errors import ClassificationAmbiguous
from ..base.log_support import LogContext
from ..base.logging import get_logger, normalized_log_event
from ..config.settings import NormalizerSettings
from .content_cleaner import clean_content
from .heuristics import (
    CLARIFICATION_CLOSE_TAG,
    CLARIFICATION_TAG,
    ClarificationPolicy,
    build_clarification_message,
    clarification_body,
    contains_analysis_leak,
    find_deliverable_marker,
    find_deliverable_start,
    find_explicit_wrapper,
    has_clarification_tag,
    looks_like_clarification,
)
from .wrappers import WrapperKind

ALL_WRAPPER_TAGS = tuple(k.open_tag for k in WrapperKind) + tuple(k.close_tag for k in WrapperKind)

# Per active wrapper: every open tag plus the close tags of the other kinds.
STRAY_TAG_PATTERNS: Dict[WrapperKind, Pattern[str]] = {
    active: re.compile(
        "|".join(
            re.escape(tag)
            for tag in ALL_WRAPPER_TAGS
            if tag != active.close_tag
        ),
        re.IGNORECASE,
    )
    for active in WrapperKind
}


def partial_tag_length(text: str) -> int:
    """Length of a trailing fragment that could still grow into a wrapper tag."""
    idx = text.rfind("<")
    if idx == -1:
        return 0
    tail = text[idx:].lower()
    if any(tag.startswith(tail) and tag != tail for tag in ALL_WRAPPER_TAGS):
        return len(text) - idx
    return 0


@dataclass
class ClassifierState:
    """Mutable classification state for a single stream."""

    preamble_buffer: str = ""
    content_started: bool = False
    active_wrapper: Optional[WrapperKind] = None
    wrapper_opened_by_classifier: bool = False
    wrapper_closed: bool = False
    trimmed_char_count: int = 0
    stop_streaming: bool = False
    # Trailing emitted characters, enough to spot a close tag split across deltas.
    emitted_tail: str = ""
    # Held back while it may still be the start of an in-band wrapper tag.
    pending: str = ""
    content_parts: List[str] = field(default_factory=list)


class ContentClassifier:
    """Classify and wrap one stream of text deltas.

    ``feed``, ``finish`` and ``abort`` return the wire fragments to write,
    in order; an empty list means nothing to write yet.
    """

    def __init__(
        self,
        settings: Optional[NormalizerSettings] = None,
        policy: Optional[ClarificationPolicy] = None,
        *,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._settings = settings or NormalizerSettings()
        self._policy = policy or ClarificationPolicy(window=self._settings.clarification_window)
        self._logger = logger or get_logger("normalizer.classifier")
        self._ctx = ctx
        self.state = ClassifierState()

    # ---- read-only views ----
    @property
    def content_started(self) -> bool:
        return self.state.content_started

    @property
    def stop_streaming(self) -> bool:
        return self.state.stop_streaming

    @property
    def active_wrapper(self) -> Optional[WrapperKind]:
        return self.state.active_wrapper

    @property
    def final_text(self) -> str:
        """Content emitted inside the wrapper (synthesized tags excluded)."""
        return "".join(self.state.content_parts)

    # ---- stream lifecycle ----
    def feed(self, text: str) -> List[str]:
        """Consume one text delta."""
        s = self.state
        if not text or s.stop_streaming or s.wrapper_closed:
            return []
        if s.content_started:
            return self._emit_content(text)

        self._append_preamble(text)
        buffer = s.preamble_buffer
        tag_at = buffer.lower().find(CLARIFICATION_TAG)
        if tag_at != -1:
            if not self._deliverable_before(buffer, tag_at):
                # Wait for the model to finish its tagged question.
                if CLARIFICATION_CLOSE_TAG in buffer.lower():
                    return self._emit_clarification(buffer)
                return []
        elif looks_like_clarification(buffer, self._policy):
            return self._emit_clarification(buffer)
        return self._try_start_deliverable()

    def finish(self) -> List[str]:
        """Apply the end-of-stream fallback and close any open wrapper."""
        s = self.state
        if s.stop_streaming:
            return []
        out: List[str] = []
        if not s.content_started:
            cleaned = clean_content(s.preamble_buffer).strip()
            if cleaned and (has_clarification_tag(cleaned) or looks_like_clarification(cleaned, self._policy)):
                return self._emit_clarification(cleaned)
            out.extend(self._emit_fallback(cleaned))
        if s.active_wrapper is not None and not s.wrapper_closed:
            out.extend(self._flush_pending())
            out.append(s.active_wrapper.close_tag)
            s.wrapper_closed = True
        self._check_leak()
        return out

    def abort(self) -> List[str]:
        """Force-close an open wrapper before the stream ends with an error."""
        s = self.state
        if s.active_wrapper is None or s.wrapper_closed:
            return []
        out = self._flush_pending()
        s.wrapper_closed = True
        out.append(s.active_wrapper.close_tag)
        return out

    # ---- internals ----
    def _append_preamble(self, text: str) -> None:
        s = self.state
        s.preamble_buffer += text
        overflow = len(s.preamble_buffer) - self._settings.preamble_cap
        if overflow > 0:
            s.preamble_buffer = s.preamble_buffer[overflow:]
            s.trimmed_char_count += overflow

    def _start(self, kind: WrapperKind, *, synthesized: bool) -> None:
        s = self.state
        s.content_started = True
        s.active_wrapper = kind
        s.wrapper_opened_by_classifier = synthesized
        s.preamble_buffer = ""

    def _emit_clarification(self, text: str) -> List[str]:
        s = self.state
        body = clarification_body(text)
        message = build_clarification_message(body)
        s.trimmed_char_count += max(len(s.preamble_buffer) - len(body), 0)
        self._start(WrapperKind.CLARIFICATION_REQUEST, synthesized=True)
        s.content_parts.append(message)
        s.wrapper_closed = True
        s.stop_streaming = True
        normalized_log_event(
            self._logger,
            "classify.clarification",
            self._ctx,
            phase="classify",
            emitted=True,
            trimmed=s.trimmed_char_count,
        )
        kind = WrapperKind.CLARIFICATION_REQUEST
        return [kind.open_tag, message, kind.close_tag]

    def _try_start_deliverable(self) -> List[str]:
        s = self.state
        buffer = s.preamble_buffer
        explicit = find_explicit_wrapper(buffer)
        start = find_deliverable_start(buffer)
        if explicit is not None:
            # The model's own tag wins over any marker seen before it.
            kind, offset = explicit
            s.trimmed_char_count += offset
            self._start(kind, synthesized=False)
            out = [kind.open_tag] + self._emit_content(buffer[offset + len(kind.open_tag):])
        elif start != -1:
            body = buffer[start:].lstrip()
            s.trimmed_char_count += len(buffer) - len(body)
            self._start(WrapperKind.EMAIL_COPY, synthesized=True)
            out = [WrapperKind.EMAIL_COPY.open_tag] + self._emit_content(body)
        else:
            return []
        normalized_log_event(
            self._logger,
            "classify.trimmed",
            self._ctx,
            phase="classify",
            emitted=True,
            wrapper=s.active_wrapper.value if s.active_wrapper else None,
            trimmed=s.trimmed_char_count,
            synthesized=s.wrapper_opened_by_classifier,
        )
        return out

    def _emit_fallback(self, cleaned: str) -> List[str]:
        s = self.state
        normalized_log_event(
            self._logger,
            "classify.fallback",
            self._ctx,
            phase="finalize",
            level=logging.WARNING,
            error_code=ClassificationAmbiguous.code.value,
            emitted=bool(cleaned),
            buffered=len(s.preamble_buffer),
        )
        text = cleaned or self._settings.empty_response_message
        s.trimmed_char_count += max(len(s.preamble_buffer) - len(cleaned), 0)
        self._start(WrapperKind.NON_COPY_RESPONSE, synthesized=True)
        s.content_parts.append(text)
        return [WrapperKind.NON_COPY_RESPONSE.open_tag, text]

    def _emit_content(self, text: str) -> List[str]:
        s = self.state
        if s.active_wrapper is None:
            return []
        close = s.active_wrapper.close_tag
        text = STRAY_TAG_PATTERNS[s.active_wrapper].sub("", s.pending + text)
        s.pending = ""
        combined = s.emitted_tail + text
        idx = combined.lower().find(close)
        if idx != -1:
            # The model closed the wrapper itself; drop whatever follows.
            text = text[: idx + len(close) - len(s.emitted_tail)]
            s.wrapper_closed = True
        else:
            held = partial_tag_length(text)
            if held:
                s.pending = text[-held:]
                text = text[:-held]
        s.emitted_tail = (s.emitted_tail + text)[-(len(close) - 1):]
        if not text:
            return []
        s.content_parts.append(text)
        return [text]

    def _flush_pending(self) -> List[str]:
        s = self.state
        if not s.pending:
            return []
        text, s.pending = s.pending, ""
        s.content_parts.append(text)
        return [text]

    @staticmethod
    def _deliverable_before(buffer: str, offset: int) -> bool:
        """Whether a deliverable marker or in-band wrapper precedes ``offset``."""
        marker = find_deliverable_marker(buffer)
        if marker != -1 and marker < offset:
            return True
        explicit = find_explicit_wrapper(buffer)
        return explicit is not None and explicit[1] < offset

    def _check_leak(self) -> None:
        s = self.state
        if s.active_wrapper is WrapperKind.CLARIFICATION_REQUEST:
            return
        if contains_analysis_leak(self.final_text, self._settings.leak_window):
            normalized_log_event(
                self._logger,
                "classify.leak_warning",
                self._ctx,
                phase="finalize",
                level=logging.WARNING,
                wrapper=s.active_wrapper.value if s.active_wrapper else None,
            )


__all__ = ["ClassifierState", "ContentClassifier"]
