"""Status progression tracker.

Coarse progress labels derived from the number of text chunks seen and
keywords in the cumulative text. Stages advance strictly in order, at most
one per chunk, and are never revisited.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

INITIAL_STAGE = "analyzing_brand"
SEARCHING_STAGE = "searching_web"
THINKING_STAGE = "thinking"


@dataclass(frozen=True)
class StatusStage:
    """One progress stage: label, chunk threshold, trigger keywords (uppercase)."""

    label: str
    threshold: int
    keywords: Tuple[str, ...] = ()


STATUS_SEQUENCE: Tuple[StatusStage, ...] = (
    StatusStage("crafting_subject", 0, ("SUBJECT", "EMAIL SUBJECT")),
    StatusStage("writing_hero", 10, ("HERO SECTION", "ACCENT:", "HEADLINE:")),
    StatusStage("developing_body", 30, ("SECTION 2:", "SECTION 3:", "BODY")),
    StatusStage("creating_cta", 60, ("CALL-TO-ACTION", "CTA SECTION")),
    StatusStage("finalizing", 90),
)


@dataclass
class StatusState:
    """Mutable tracker state for one stream."""

    current_index: int = -1
    chunk_count: int = 0
    upper_text: str = ""


class StatusTracker:
    """Advance through ``stages`` as text chunks are observed."""

    def __init__(self, stages: Sequence[StatusStage] = STATUS_SEQUENCE) -> None:
        self._stages = tuple(stages)
        self.state = StatusState()

    @property
    def current(self) -> Optional[str]:
        idx = self.state.current_index
        return self._stages[idx].label if idx >= 0 else None

    def observe(self, text: str) -> Optional[str]:
        """Record one text chunk; return the newly reached stage label, if any.

        The threshold is compared against the count of chunks seen before
        this one, so the first stage (threshold 0) fires on the first chunk.
        """
        self.state.upper_text += text.upper()
        advanced: Optional[str] = None
        nxt = self.state.current_index + 1
        if nxt < len(self._stages):
            stage = self._stages[nxt]
            if self.state.chunk_count >= stage.threshold or any(k in self.state.upper_text for k in stage.keywords):
                self.state.current_index = nxt
                advanced = stage.label
        self.state.chunk_count += 1
        return advanced


__all__ = [
    "INITIAL_STAGE",
    "SEARCHING_STAGE",
    "THINKING_STAGE",
    "StatusStage",
    "STATUS_SEQUENCE",
    "StatusState",
    "StatusTracker",
]
