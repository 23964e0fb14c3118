"""Named heuristic predicates used by the content classifier.

Each predicate owns its own pattern list so it can be tested and tuned
without touching the classifier state machine:

* ``looks_like_clarification``: missing-input phrasing plus a trailing
  question, or an explicit clarification tag.
* ``find_deliverable_start``: earliest section-header marker, walked back
  to the enclosing paragraph.
* ``contains_analysis_leak``: leftover option framing or analysis talk at
  the top of delivered content.
* ``build_clarification_message``: the normalized clarification body.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Sequence, Tuple

from ..config.defaults import CLARIFICATION_WINDOW
from .wrappers import WrapperKind

CLARIFICATION_TAG = WrapperKind.CLARIFICATION_REQUEST.open_tag
CLARIFICATION_CLOSE_TAG = WrapperKind.CLARIFICATION_REQUEST.close_tag

MISSING_INPUT_PHRASES: Tuple[str, ...] = (
    "need more information",
    "missing required",
    "required information",
    "please provide",
    "can you clarify",
    "what is this email",
    "campaign type",
    "primary goal",
    "offer/urgency",
    "before i write",
    "which products",
    "target audience",
)

TRAILING_QUESTION = re.compile(r"\?\s*$")

EMAIL_START_PATTERNS: Tuple[Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"\*\*HERO SECTION:\*\*",
        r"HERO SECTION:",
        r"\*\*Section Title:\*\*",
        r"Section Title:",
        r"\*\*FINAL CTA SECTION:\*\*",
        r"FINAL CTA SECTION:",
        r"\*\*EMAIL SUBJECT LINE:\*\*",
        r"EMAIL SUBJECT LINE:",
        r"(^|\n)SUBJECT LINE:",
        r"(^|\n)SUBJECT:",
        r"(^|\n)PREVIEW TEXT:",
        r"\*\*Sub-headline:\*\*",
        r"\*\*Headline:\*\*",
        r"\*\*Call to Action Button:\*\*",
        r"\bCall to Action\b",
        r"\bCTA\b",
    )
)

# In-band tags the model may emit itself; adopted as the wrapper verbatim.
EXPLICIT_WRAPPER_TAGS: Tuple[WrapperKind, ...] = (
    WrapperKind.EMAIL_COPY,
    WrapperKind.NON_COPY_RESPONSE,
)

ANALYSIS_LEAK_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"\*\*A\."),
    re.compile(r"\*\*B\."),
    re.compile(r"\*\*C\."),
    re.compile(r"\*\*BRAND (?:VOICE|DEEP DIVE)", re.IGNORECASE),
    re.compile(r"\bstrategic analysis\b", re.IGNORECASE),
    re.compile(r"\bmy analysis\b", re.IGNORECASE),
)

CLARIFICATION_OPENING = "Need a quick clarification before I write the email:"

CLARIFICATION_FIELDS: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("Campaign type or goal", re.compile(r"campaign type|goal|purpose", re.IGNORECASE)),
    ("Product or category to feature", re.compile(r"product|collection|category", re.IGNORECASE)),
    ("Offer or promotion", re.compile(r"offer|promotion|discount|free shipping", re.IGNORECASE)),
    ("Audience segment", re.compile(r"audience|segment|customers|subscribers", re.IGNORECASE)),
    ("Timing or urgency", re.compile(r"timing|urgency|deadline|season", re.IGNORECASE)),
)


@dataclass(frozen=True)
class ClarificationPolicy:
    """Tunable clarification detection policy.

    Attributes:
        phrases: Lowercase phrases that signal missing required input.
        window: Trailing characters searched for a question mark.
        require_question: When False, a phrase alone is enough.
    """

    phrases: Tuple[str, ...] = MISSING_INPUT_PHRASES
    window: int = CLARIFICATION_WINDOW
    require_question: bool = True


DEFAULT_POLICY = ClarificationPolicy()


def has_clarification_tag(text: str) -> bool:
    return CLARIFICATION_TAG in text.lower()


def looks_like_clarification(text: str, policy: ClarificationPolicy = DEFAULT_POLICY) -> bool:
    """Return True when ``text`` reads as a request for missing input."""
    if not text:
        return False
    if has_clarification_tag(text):
        return True
    lowered = text.lower()
    if not any(p in lowered for p in policy.phrases):
        return False
    if not policy.require_question:
        return True
    return bool(TRAILING_QUESTION.search(lowered[-policy.window:]))


def clarification_body(text: str) -> str:
    """Return the clarification text with any explicit tags stripped."""
    lowered = text.lower()
    idx = lowered.find(CLARIFICATION_TAG)
    body = text[idx + len(CLARIFICATION_TAG):] if idx != -1 else text
    end = body.lower().find(CLARIFICATION_CLOSE_TAG)
    if end != -1:
        body = body[:end]
    return body.strip()


def missing_fields(text: str) -> List[str]:
    """Return the labels of the known fields mentioned in ``text``.

    Falls back to every known field when none is mentioned specifically.
    """
    found = [label for label, pattern in CLARIFICATION_FIELDS if pattern.search(text)]
    return found or [label for label, _ in CLARIFICATION_FIELDS]


def build_clarification_message(text: str) -> str:
    """Return the normalized clarification body for ``text``."""
    bullets = "\n".join(f"• {label}" for label in missing_fields(text))
    return f"{CLARIFICATION_OPENING}\n\n{bullets}"


def find_explicit_wrapper(text: str) -> Optional[Tuple[WrapperKind, int]]:
    """Return the earliest in-band wrapper tag and its offset, if any."""
    lowered = text.lower()
    best: Optional[Tuple[WrapperKind, int]] = None
    for kind in EXPLICIT_WRAPPER_TAGS:
        idx = lowered.find(kind.open_tag)
        if idx != -1 and (best is None or idx < best[1]):
            best = (kind, idx)
    return best


def _earliest_marker(text: str, patterns: Sequence[Pattern[str]]) -> int:
    earliest = -1
    for pattern in patterns:
        match = pattern.search(text)
        if not match:
            continue
        pos = match.start()
        if text.startswith("\n", pos):
            pos += 1
        if earliest == -1 or pos < earliest:
            earliest = pos
    return earliest


def find_deliverable_marker(text: str, patterns: Sequence[Pattern[str]] = EMAIL_START_PATTERNS) -> int:
    """Return the offset of the earliest deliverable marker itself, or -1."""
    return _earliest_marker(text, patterns)


def find_deliverable_start(text: str, patterns: Sequence[Pattern[str]] = EMAIL_START_PATTERNS) -> int:
    """Return the offset where deliverable content starts, or -1.

    The earliest marker offset is walked back to just after the last
    paragraph break before it, or the last line break when there is none,
    so a label on the preceding line stays attached to its section.
    """
    earliest = _earliest_marker(text, patterns)
    if earliest == -1:
        return -1
    before = text[:earliest]
    paragraph = before.rfind("\n\n")
    if paragraph != -1:
        return paragraph + 2
    line = before.rfind("\n")
    if line != -1:
        return line + 1
    return earliest


def contains_analysis_leak(text: str, window: int) -> bool:
    """Whether the leading ``window`` characters still look like analysis."""
    head = text[:window]
    return any(p.search(head) for p in ANALYSIS_LEAK_PATTERNS)


__all__ = [
    "ClarificationPolicy",
    "DEFAULT_POLICY",
    "MISSING_INPUT_PHRASES",
    "EMAIL_START_PATTERNS",
    "ANALYSIS_LEAK_PATTERNS",
    "CLARIFICATION_OPENING",
    "CLARIFICATION_FIELDS",
    "has_clarification_tag",
    "looks_like_clarification",
    "clarification_body",
    "missing_fields",
    "build_clarification_message",
    "find_explicit_wrapper",
    "find_deliverable_marker",
    "find_deliverable_start",
    "contains_analysis_leak",
]
