"""
Non-fatal normalizer conditions.

These exceptions describe degraded-but-recoverable situations. They are
raised close to where the problem is detected, caught by the component that
owns the recovery path, and logged with their ``code``; none of them ever
reaches the caller of the stream.
"""
from __future__ import annotations

from .error_code import ErrorCode


class NormalizerError(Exception):
    """Base class for recoverable normalizer conditions."""

    code: ErrorCode = ErrorCode.UNKNOWN


class ClassificationAmbiguous(NormalizerError):
    """No deliverable marker was found before the stream ended."""

    code = ErrorCode.CLASSIFICATION_AMBIGUOUS


class MemoryStoreFailure(NormalizerError):
    """A single memory directive could not be stored."""

    code = ErrorCode.MEMORY_STORE_FAILURE


class ExtractionFailure(NormalizerError):
    """Side-channel link extraction failed; callers fall back to no links."""

    code = ErrorCode.EXTRACTION_FAILURE


__all__ = [
    "NormalizerError",
    "ClassificationAmbiguous",
    "MemoryStoreFailure",
    "ExtractionFailure",
]
