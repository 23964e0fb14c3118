"""
Structured provider error exception types.

`ProviderError` wraps provider SDK exceptions with a normalized `ErrorCode`.
`ProviderUnavailable` is the fatal flavour surfaced to callers whenever the
upstream provider cannot start or continue a stream; this subsystem never
retries it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        retryable: Hint for the caller's retry policy (not acted on here).
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:
        return f"{self.provider}: {self.code.value}: {self.message}"


@dataclass
class ProviderUnavailable(ProviderError):
    """Fatal upstream failure (network, auth, model) propagated to the caller."""


__all__ = ["ProviderError", "ProviderUnavailable"]
