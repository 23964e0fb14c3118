"""Unified error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``stream_normalizer.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError, ProviderUnavailable
from .errors_parts.normalizer_error import (
    ClassificationAmbiguous,
    ExtractionFailure,
    MemoryStoreFailure,
    NormalizerError,
)
from .errors_parts.classification import classify_exception, is_retryable

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ProviderUnavailable",
    "NormalizerError",
    "ClassificationAmbiguous",
    "MemoryStoreFailure",
    "ExtractionFailure",
    "classify_exception",
    "is_retryable",
]
