"""OpenAI streaming helpers.

Chat Completions streams carry everything inside ``choices[0].delta``.
This module opens that stream with normalized errors and maps one chunk to
at most one canonical event. OpenAI exposes no explicit reasoning start or
stop events, so the multiplexer closes an open thinking block when the
first visible text arrives.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from ..base.errors import ProviderUnavailable, classify_exception, is_retryable
from ..base.streaming import ParsedEvent, ReasoningDelta, TextDelta, ToolInvocationStart
from ..config.defaults import WEB_SEARCH_TOOL_NAME


def _get(obj: Any, key: str, default: Any = None) -> Any:
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def start_stream(client: Any, params: dict, model: str, provider_name: str) -> Iterable[Any]:
    """Open the raw chunk stream via ``client.chat.completions.create``."""
    try:
        return client.chat.completions.create(**params)
    except Exception as e:
        code = classify_exception(e)
        raise ProviderUnavailable(
            code=code,
            message=str(e),
            provider=provider_name,
            model=model,
            retryable=is_retryable(code),
            raw=e,
        ) from e


def _first_delta(chunk: Any) -> Any:
    choices = _get(chunk, "choices") or []
    if not choices:
        return None
    return _get(choices[0], "delta")


def _tool_call_start(tool_calls: Any) -> Optional[ToolInvocationStart]:
    """Return a start event for the first tool call that begins in this chunk.

    Argument-only continuation fragments carry neither an ``id`` nor a
    function name and are ignored.
    """
    for call in tool_calls or []:
        fn = _get(call, "function")
        name = _get(fn, "name")
        if name or _get(call, "id"):
            return ToolInvocationStart(name=name or WEB_SEARCH_TOOL_NAME)
    return None


def translate_chunk(chunk: Any) -> Optional[ParsedEvent]:  # noqa: ANN401 - SDK type
    """Map one Chat Completions chunk to at most one canonical event.

    Precedence: tool call start, reasoning text, visible content.
    """
    delta = _first_delta(chunk)
    if delta is None:
        return None
    tool_calls = _get(delta, "tool_calls")
    if tool_calls:
        return _tool_call_start(tool_calls)
    reasoning = _get(delta, "reasoning_content")
    if reasoning:
        return ReasoningDelta(reasoning)
    content = _get(delta, "content")
    if content:
        return TextDelta(content)
    return None


__all__ = ["start_stream", "translate_chunk"]
