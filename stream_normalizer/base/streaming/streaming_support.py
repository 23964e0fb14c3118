"""Unified helper for determining streaming capability."""
from __future__ import annotations

from typing import Any, Callable, Optional

__all__ = ["streaming_supported"]


def streaming_supported(
    sdk_obj: Any,
    *,
    require_api_key: bool,
    api_key_getter: Callable[[], Optional[str]],
) -> bool:
    """Return True when the SDK is importable and, if required, a key is set."""
    if sdk_obj is None:
        return False
    if require_api_key:
        key = api_key_getter() or ""
        if not key.strip():
            return False
    return True
