"""Provider selector used to pick a Provider Adapter strategy."""
from __future__ import annotations

from enum import Enum


class ProviderKind(str, Enum):
    """Supported upstream streaming dialects."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"

    @classmethod
    def parse(cls, value: "str | ProviderKind") -> "ProviderKind":
        """Return the member for ``value`` (case-insensitive).

        Raises:
            ValueError: If ``value`` names no supported provider.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            raise ValueError(f"unsupported provider: {value!r}") from None


__all__ = ["ProviderKind"]
