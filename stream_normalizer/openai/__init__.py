"""OpenAI provider adapter package."""

from .client import OpenAIAdapter
from .stream_helpers import translate_chunk

__all__ = ["OpenAIAdapter", "translate_chunk"]
