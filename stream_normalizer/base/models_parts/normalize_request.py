"""
Inputs of one normalized stream.

`NormalizeRequest` carries everything the caller hands to the subsystem:
the ordered conversation, the target model, the system prompt, the
provider selector, and two optional hints (reference website for search
scoping, conversation id for routing memory directives).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .message import Message
from .provider_kind import ProviderKind


@dataclass
class NormalizeRequest:
    """Provider-agnostic request for one streamed, normalized response.

    Attributes:
        messages: Ordered conversation turns (system turns are ignored; the
            system prompt travels in ``system_prompt``).
        model: Target model identifier as chosen by the caller.
        system_prompt: System prompt text.
        provider: Which provider dialect to speak.
        website_url: Optional reference website; its host scopes web search.
        conversation_id: Optional id used only to route memory directives.
    """

    messages: List[Message]
    model: str
    system_prompt: str = ""
    provider: ProviderKind = ProviderKind.ANTHROPIC
    website_url: Optional[str] = None
    conversation_id: Optional[str] = None

    def conversation_turns(self) -> List[Message]:
        """Return user/assistant turns only, in order."""
        return [m for m in self.messages if m.role in ("user", "assistant")]


__all__ = ["NormalizeRequest"]
