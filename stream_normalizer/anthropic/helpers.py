"""Anthropic request shaping helpers.

Kept separate from ``client.py`` so the adapter class stays a thin
strategy object: model alias resolution, message conversion and the web
search tool definition live here.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..base.log_support import LogContext
from ..base.logging import normalized_log_event
from ..base.models import NormalizeRequest
from ..base.url_utils import website_host
from ..config.defaults import (
    ANTHROPIC_DEFAULT_MODEL,
    ANTHROPIC_MODEL_ALIASES,
    WEB_SEARCH_TOOL_NAME,
    WEB_SEARCH_TOOL_TYPE,
)
from ..config.settings import NormalizerSettings


def resolve_model(model: str) -> str:
    """Map a caller-facing model id to the Anthropic API id.

    Known aliases map explicitly, bare ids pass through, and any other
    ``vendor/name`` id falls back to the default model.
    """
    if model in ANTHROPIC_MODEL_ALIASES:
        return ANTHROPIC_MODEL_ALIASES[model]
    if "/" in model:
        return ANTHROPIC_DEFAULT_MODEL
    return model


def build_messages(request: NormalizeRequest) -> List[Dict[str, str]]:
    """Convert canonical turns into Messages API ``messages``."""
    return [m.to_dict() for m in request.conversation_turns()]


def build_search_tool(
    request: NormalizeRequest,
    settings: NormalizerSettings,
    logger: logging.Logger,
    ctx: Optional[LogContext] = None,
) -> Dict[str, Any]:
    """Return the ``web_search`` server tool definition.

    Domain scoping is applied only when the reference website parses to a
    host; an unparsable URL leaves search unscoped and logs a warning.
    """
    tool: Dict[str, Any] = {
        "type": WEB_SEARCH_TOOL_TYPE,
        "name": WEB_SEARCH_TOOL_NAME,
        "max_uses": settings.search_max_uses,
    }
    if not request.website_url:
        return tool
    host = website_host(request.website_url)
    if host is None:
        normalized_log_event(
            logger,
            "adapter.search_scope",
            ctx,
            phase="start",
            level=logging.WARNING,
            scoped=False,
            website_url=request.website_url,
        )
        return tool
    domains = [host] + [d for d in settings.search_allowed_domains if d != host]
    tool["allowed_domains"] = domains
    normalized_log_event(logger, "adapter.search_scope", ctx, phase="start", scoped=True, domains=domains)
    return tool


__all__ = ["resolve_model", "build_messages", "build_search_tool"]
