"""Anthropic streaming helpers.

Purpose:
- Open the Messages API event stream with errors normalized to
  ``ProviderUnavailable``.
- Translate raw Anthropic stream events into canonical parsed events. The
  translation is pure: no state is kept between events and unknown event
  kinds map to ``None``.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from ..base.errors import ProviderUnavailable, classify_exception, is_retryable
from ..base.streaming import (
    ParsedEvent,
    ReasoningDelta,
    ReasoningEnd,
    ReasoningStart,
    TextDelta,
    ToolInvocationStart,
    ToolResult,
)
from ..config.defaults import WEB_SEARCH_TOOL_NAME


def _get(obj: Any, key: str, default: Any = None) -> Any:
    """Read ``key`` from an SDK model or a plain mapping."""
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def start_stream(client: Any, params: dict, model: str, provider_name: str) -> Iterable[Any]:
    """Open the raw event stream via ``client.messages.create(stream=True)``.

    Errors are normalized to :class:`ProviderUnavailable`; nothing is retried.
    """
    try:
        return client.messages.create(**params)
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


def flatten_search_results(content: Any) -> str:
    """Flatten a ``web_search_tool_result`` payload into ``title - url`` lines.

    Only ``web_search_result`` items with a url are kept. Error payloads (a
    single object carrying ``error_code``) flatten to an empty string.
    """
    if not isinstance(content, (list, tuple)):
        return ""
    lines: List[str] = []
    for item in content:
        if _get(item, "type") != "web_search_result":
            continue
        url = _get(item, "url")
        if not url:
            continue
        title = (_get(item, "title") or "").strip()
        lines.append(f"{title} - {url}" if title else str(url))
    return "\n".join(lines)


def _translate_block_start(block: Any) -> Optional[ParsedEvent]:
    block_type = _get(block, "type")
    if block_type == "thinking":
        return ReasoningStart()
    if block_type == "server_tool_use":
        name = _get(block, "name") or WEB_SEARCH_TOOL_NAME
        return ToolInvocationStart(name=name, input=_get(block, "input"))
    if block_type == "web_search_tool_result":
        return ToolResult(name=WEB_SEARCH_TOOL_NAME, extracted_text=flatten_search_results(_get(block, "content")))
    if block_type == "text":
        text = _get(block, "text") or ""
        return TextDelta(text) if text else None
    return None


def _translate_delta(delta: Any) -> Optional[ParsedEvent]:
    delta_type = _get(delta, "type")
    if delta_type == "thinking_delta":
        text = _get(delta, "thinking") or ""
        return ReasoningDelta(text) if text else None
    if delta_type == "text_delta":
        text = _get(delta, "text") or ""
        return TextDelta(text) if text else None
    return None


def translate_event(raw: Any) -> Optional[ParsedEvent]:  # noqa: ANN401 - SDK type
    """Map one Anthropic stream event to at most one canonical event.

    ``content_block_stop`` always maps to :class:`ReasoningEnd`; the
    multiplexer ignores it when no thinking block is open.
    """
    event_type = _get(raw, "type")
    if event_type == "content_block_start":
        return _translate_block_start(_get(raw, "content_block"))
    if event_type == "content_block_delta":
        return _translate_delta(_get(raw, "delta"))
    if event_type == "content_block_stop":
        return ReasoningEnd()
    return None


__all__ = ["start_stream", "translate_event", "flatten_search_results"]
