"""
Normalized error codes (taxonomy).

Defines the `ErrorCode` enumeration used by provider adapters and the stream
multiplexer. Values are lowercase snake_case and are a stable contract for
logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSIENT = "transient"
    UNSUPPORTED = "unsupported"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    INTERNAL = "internal"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"
    # Non-fatal conditions raised inside the normalizer itself
    CLASSIFICATION_AMBIGUOUS = "classification_ambiguous"
    MEMORY_STORE_FAILURE = "memory_store_failure"
    EXTRACTION_FAILURE = "extraction_failure"


__all__ = ["ErrorCode"]
