"""Typed normalizer settings resolved from layered configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from . import defaults


@dataclass(frozen=True)
class NormalizerSettings:
    """Tunables for one normalized stream.

    Attributes:
        preamble_cap: Maximum characters kept in the preamble buffer.
        leak_window: Leading characters of final content checked for
            analysis leakage.
        clarification_window: Trailing characters searched for a question
            mark by the clarification heuristic.
        search_allowed_domains: Fixed allow-list joined with the reference
            website's host when scoping web search.
        search_max_uses: Upper bound on web searches per response.
        anthropic_max_tokens: ``max_tokens`` sent to Anthropic.
        anthropic_temperature: ``temperature`` sent to Anthropic.
        thinking_budget_tokens: Extended-thinking budget (0 disables it).
        empty_response_message: Body used when nothing usable was streamed.
    """

    preamble_cap: int = defaults.PREAMBLE_CAP
    leak_window: int = defaults.LEAK_WINDOW
    clarification_window: int = defaults.CLARIFICATION_WINDOW
    search_allowed_domains: Tuple[str, ...] = defaults.SEARCH_ALLOWED_DOMAINS
    search_max_uses: int = defaults.WEB_SEARCH_MAX_USES
    anthropic_max_tokens: int = defaults.ANTHROPIC_MAX_TOKENS
    anthropic_temperature: float = defaults.ANTHROPIC_TEMPERATURE
    thinking_budget_tokens: int = defaults.THINKING_BUDGET_TOKENS
    empty_response_message: str = defaults.EMPTY_RESPONSE_MESSAGE


__all__ = ["NormalizerSettings"]
