"""Anthropic provider adapter package."""

from .client import AnthropicAdapter
from .stream_helpers import translate_event

__all__ = ["AnthropicAdapter", "translate_event"]
