"""Preamble cleaner applied before fallback classification.

Removes research announcements the model tends to narrate before (or
instead of) its answer, then tidies blank-line runs.
"""

from __future__ import annotations

import re
from typing import Pattern, Tuple

_FLAGS = re.IGNORECASE | re.MULTILINE

RESEARCH_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"^Based on my (?:research|web search|search|investigation),?\s*", _FLAGS),
    re.compile(r"^According to my (?:research|web search|search|investigation),?\s*", _FLAGS),
    re.compile(r"^From (?:my )?(?:research|web search|search|investigation),?\s*", _FLAGS),
    re.compile(r"^I can see that\s*", _FLAGS),
    re.compile(r"^I found that\s*", _FLAGS),
    re.compile(r"^My research shows\s*(?:that\s*)?", _FLAGS),
    re.compile(r"^The search results show\s*(?:that\s*)?", _FLAGS),
    re.compile(r"^Let me search[^\n]*?\.\s*", _FLAGS),
    re.compile(r"^I'll search[^\n]*\n?", _FLAGS),
    re.compile(r"^Searching[^\n]*\n?", _FLAGS),
    re.compile(r"^I need to (?:search|find|look up)[^\n]*\n?", _FLAGS),
)

_LEADING_BLANK_LINES = re.compile(r"^(?:[ \t]*\n)+")
_BLANK_RUNS = re.compile(r"\n{3,}")


def clean_content(text: str) -> str:
    """Return ``text`` with research narration and extra blank lines removed.

    The result is not stripped; callers decide how much surrounding
    whitespace matters.
    """
    if not text:
        return ""
    cleaned = text
    for pattern in RESEARCH_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    cleaned = _LEADING_BLANK_LINES.sub("", cleaned)
    return _BLANK_RUNS.sub("\n\n", cleaned)


__all__ = ["clean_content", "RESEARCH_PATTERNS"]
