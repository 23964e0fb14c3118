"""AnthropicAdapter: Provider Adapter for the Anthropic Messages API.

Streams through ``client.messages.create(stream=True)`` so the raw event
sequence (thinking blocks, server tool use, web search results, text
deltas) is visible to the parser. Extended thinking and the web search
server tool are always requested; their budgets come from
:class:`NormalizerSettings`.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

import anthropic

from ..base.log_support import LogContext
from ..base.logging import get_logger
from ..base.models import NormalizeRequest
from ..base.streaming import ParsedEvent, streaming_supported
from ..config import get_normalizer_config, get_provider_config
from ..config.settings import NormalizerSettings
from .helpers import build_messages, build_search_tool, resolve_model
from .stream_helpers import start_stream, translate_event


class AnthropicAdapter:
    """Adapter implementing ``ProviderAdapter`` for Anthropic.

    Args:
        client: Pre-built SDK client (tests inject fakes here). When omitted
            an ``anthropic.Anthropic`` client is created lazily.
        api_key: Explicit API key; falls back to layered config.
        settings: Normalizer tunables; resolved from config when omitted.
    """

    def __init__(
        self,
        client: Any = None,
        api_key: Optional[str] = None,
        settings: Optional[NormalizerSettings] = None,
    ) -> None:
        cfg = get_provider_config("anthropic")
        self._api_key = api_key or cfg.get("api_key")
        self._client = client
        self._settings = settings or get_normalizer_config()
        self._logger = get_logger("anthropic")

    @property
    def provider_name(self) -> str:
        return "anthropic"

    def supports_streaming(self) -> bool:
        """Return True if an injected client exists or an API key is configured."""
        if self._client is not None:
            return True
        return streaming_supported(
            anthropic,
            require_api_key=True,
            api_key_getter=lambda: self._api_key or "",
        )

    def _create_client(self) -> Any:
        if self._client is None:
            self._client = anthropic.Anthropic(api_key=self._api_key) if self._api_key else anthropic.Anthropic()
        return self._client

    def build_params(self, request: NormalizeRequest) -> Dict[str, Any]:
        """Return keyword arguments for ``messages.create``."""
        ctx = LogContext(provider=self.provider_name, model=request.model, conversation_id=request.conversation_id)
        params: Dict[str, Any] = {
            "model": resolve_model(request.model),
            "max_tokens": self._settings.anthropic_max_tokens,
            "temperature": self._settings.anthropic_temperature,
            "messages": build_messages(request),
            "tools": [build_search_tool(request, self._settings, self._logger, ctx)],
            "stream": True,
        }
        if request.system_prompt:
            params["system"] = request.system_prompt
        if self._settings.thinking_budget_tokens > 0:
            params["thinking"] = {"type": "enabled", "budget_tokens": self._settings.thinking_budget_tokens}
        return params

    def open_stream(self, request: NormalizeRequest) -> Iterable[Any]:
        params = self.build_params(request)
        return start_stream(self._create_client(), params, params["model"], self.provider_name)

    def parse_event(self, raw: Any) -> Optional[ParsedEvent]:
        return translate_event(raw)


__all__ = ["AnthropicAdapter"]
