"""stream_normalizer.config.env
=============================

Environment variable mapping and helpers for provider credentials.

Design Notes
------------
- ``ENV_MAP`` holds the canonical variable per provider.
- Helpers never raise on unknown providers or unset variables; callers
  decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts
    with 'test_' (case-insensitive).
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical API key variable for ``provider`` (or None)."""
    return ENV_MAP.get(provider.lower()) if provider else None


def resolve_provider_key(provider: str) -> Optional[str]:
    """Return the API key for ``provider`` from the environment, if set."""
    name = get_env_var_name(provider)
    if not name:
        return None
    value = os.getenv(name)
    return value if value and value.strip() else None


__all__ = ["ENV_MAP", "is_placeholder", "get_env_var_name", "resolve_provider_key"]
