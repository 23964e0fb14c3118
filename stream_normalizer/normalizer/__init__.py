"""Normalizer core: classifier, status tracker, extraction and the multiplexer."""

from .classifier import ClassifierState, ContentClassifier
from .content_cleaner import clean_content
from .extraction import SideChannelExtractor
from .heuristics import (
    ClarificationPolicy,
    build_clarification_message,
    contains_analysis_leak,
    find_deliverable_start,
    looks_like_clarification,
)
from .multiplexer import StreamMultiplexer, normalize_stream
from .status import STATUS_SEQUENCE, StatusTracker
from .wrappers import WrapperKind

__all__ = [
    "ClassifierState",
    "ContentClassifier",
    "ClarificationPolicy",
    "SideChannelExtractor",
    "StatusTracker",
    "STATUS_SEQUENCE",
    "StreamMultiplexer",
    "WrapperKind",
    "build_clarification_message",
    "clean_content",
    "contains_analysis_leak",
    "find_deliverable_start",
    "looks_like_clarification",
    "normalize_stream",
]
