"""OpenAIAdapter: Provider Adapter for OpenAI Chat Completions streaming.

Chat Completions has no server-side search tool definition; search-capable
models (ids containing ``search``) get ``web_search_options`` and the
reference website's host is logged as search context.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

import openai

from ..base.url_utils import website_host
from ..base.log_support import LogContext
from ..base.logging import get_logger, normalized_log_event
from ..base.models import NormalizeRequest
from ..base.streaming import ParsedEvent, streaming_supported
from ..config import get_provider_config
from .helpers import build_messages, supports_web_search
from .stream_helpers import start_stream, translate_chunk


class OpenAIAdapter:
    """Adapter implementing ``ProviderAdapter`` for OpenAI.

    Args:
        client: Pre-built SDK client (tests inject fakes here).
        api_key: Explicit API key; falls back to layered config.
        base_url: Optional API base URL override.
        settings: Accepted for factory symmetry; OpenAI requests carry no
            normalizer tunables.
    """

    def __init__(
        self,
        client: Any = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        settings: Any = None,
    ) -> None:
        cfg = get_provider_config("openai")
        self._api_key = api_key or cfg.get("api_key")
        self._base_url = base_url or cfg.get("base_url")
        self._client = client
        self._settings = settings
        self._logger = get_logger("openai")

    @property
    def provider_name(self) -> str:
        return "openai"

    def supports_streaming(self) -> bool:
        if self._client is not None:
            return True
        return streaming_supported(openai, require_api_key=True, api_key_getter=lambda: self._api_key or "")

    def _create_client(self) -> Any:
        if self._client is None:
            kwargs: Dict[str, Any] = {}
            if self._api_key:
                kwargs["api_key"] = self._api_key
            if self._base_url:
                kwargs["base_url"] = self._base_url
            self._client = openai.OpenAI(**kwargs)
        return self._client

    def build_params(self, request: NormalizeRequest) -> Dict[str, Any]:
        """Return keyword arguments for ``chat.completions.create``."""
        params: Dict[str, Any] = {
            "model": request.model,
            "messages": build_messages(request),
            "stream": True,
        }
        if supports_web_search(request.model):
            params["web_search_options"] = {}
            host = website_host(request.website_url)
            if host:
                ctx = LogContext(provider=self.provider_name, model=request.model, conversation_id=request.conversation_id)
                normalized_log_event(
                    self._logger, "adapter.search_scope", ctx, phase="start", scoped=False, reference_host=host
                )
        return params

    def open_stream(self, request: NormalizeRequest) -> Iterable[Any]:
        return start_stream(self._create_client(), self.build_params(request), request.model, self.provider_name)

    def parse_event(self, raw: Any) -> Optional[ParsedEvent]:
        return translate_chunk(raw)


__all__ = ["OpenAIAdapter"]
