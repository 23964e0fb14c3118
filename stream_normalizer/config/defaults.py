"""stream_normalizer.config.defaults
==================================

Central place for small, stable default values used across the package and
the service layer. Every value can be overridden via environment variables
or the external config file; these are the fallbacks for local development
and tests.

This module intentionally imports nothing from the rest of the package.
"""

from __future__ import annotations

# ---- Service / HTTP layer ----
SERVICE_DEFAULT_HOST = "127.0.0.1"
SERVICE_DEFAULT_PORT = 8091
SERVICE_CORS_DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"

# ---- Provider defaults ----
ANTHROPIC_DEFAULT_MODEL = "claude-sonnet-4-5"
OPENAI_DEFAULT_MODEL = "gpt-4o"

# Caller-facing model ids mapped to Anthropic API ids.
ANTHROPIC_MODEL_ALIASES = {
    "anthropic/claude-sonnet-4.5": "claude-sonnet-4-5",
    "anthropic/claude-opus-4": "claude-opus-4",
    "anthropic/claude-haiku-4.5": "claude-haiku-4-5",
}

# OpenAI model families that reject a system role.
OPENAI_NO_SYSTEM_ROLE_PREFIXES = ("o1",)
OPENAI_SYSTEM_PROMPT_SEPARATOR = "\n\n---\n\n"

# ---- Anthropic request shaping ----
ANTHROPIC_MAX_TOKENS = 20000
ANTHROPIC_TEMPERATURE = 1.0
THINKING_BUDGET_TOKENS = 10000

# ---- Web search capability ----
WEB_SEARCH_TOOL_TYPE = "web_search_20250305"
WEB_SEARCH_TOOL_NAME = "web_search"
WEB_SEARCH_MAX_USES = 5
SEARCH_ALLOWED_DOMAINS = (
    "shopify.com",
    "amazon.com",
    "yelp.com",
    "trustpilot.com",
)

# ---- Classifier ----
PREAMBLE_CAP = 12000
LEAK_WINDOW = 400
CLARIFICATION_WINDOW = 120
EMPTY_RESPONSE_MESSAGE = (
    "I wasn't able to put together a response this time. "
    "Could you rephrase or add a little more detail?"
)


__all__ = [
    "SERVICE_DEFAULT_HOST",
    "SERVICE_DEFAULT_PORT",
    "SERVICE_CORS_DEFAULT_ORIGINS",
    "ANTHROPIC_DEFAULT_MODEL",
    "OPENAI_DEFAULT_MODEL",
    "ANTHROPIC_MODEL_ALIASES",
    "OPENAI_NO_SYSTEM_ROLE_PREFIXES",
    "OPENAI_SYSTEM_PROMPT_SEPARATOR",
    "ANTHROPIC_MAX_TOKENS",
    "ANTHROPIC_TEMPERATURE",
    "THINKING_BUDGET_TOKENS",
    "WEB_SEARCH_TOOL_TYPE",
    "WEB_SEARCH_TOOL_NAME",
    "WEB_SEARCH_MAX_USES",
    "SEARCH_ALLOWED_DOMAINS",
    "PREAMBLE_CAP",
    "LEAK_WINDOW",
    "CLARIFICATION_WINDOW",
    "EMPTY_RESPONSE_MESSAGE",
]
