"""Errors parts package public surface.

Prefer importing from `stream_normalizer.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError, ProviderUnavailable
from .normalizer_error import (
    ClassificationAmbiguous,
    ExtractionFailure,
    MemoryStoreFailure,
    NormalizerError,
)
from .classification import classify_exception, is_retryable

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
