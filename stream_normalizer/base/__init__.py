"""Provider-agnostic base layer: models, errors, logging, streaming primitives."""

from .cancellation import CancellationToken, CancelledError
from .errors import (
    ClassificationAmbiguous,
    ErrorCode,
    ExtractionFailure,
    MemoryStoreFailure,
    NormalizerError,
    ProviderError,
    ProviderUnavailable,
    classify_exception,
)
from .factory import ProviderFactory, UnknownProviderError
from .interfaces import IMemoryStore, ProviderAdapter
from .models import (
    ExtractionResult,
    MemoryDirective,
    Message,
    NormalizeRequest,
    ProductLink,
    ProviderKind,
)

__all__ = [
    "CancellationToken",
    "CancelledError",
    "ErrorCode",
    "ProviderError",
    "ProviderUnavailable",
    "NormalizerError",
    "ClassificationAmbiguous",
    "MemoryStoreFailure",
    "ExtractionFailure",
    "classify_exception",
    "ProviderFactory",
    "UnknownProviderError",
    "IMemoryStore",
    "ProviderAdapter",
    "Message",
    "NormalizeRequest",
    "ProductLink",
    "ExtractionResult",
    "MemoryDirective",
    "ProviderKind",
]
