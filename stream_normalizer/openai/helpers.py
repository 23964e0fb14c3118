"""OpenAI request shaping helpers."""

from __future__ import annotations

from typing import Dict, List

from ..base.models import NormalizeRequest
from ..config.defaults import OPENAI_NO_SYSTEM_ROLE_PREFIXES, OPENAI_SYSTEM_PROMPT_SEPARATOR


def rejects_system_role(model: str) -> bool:
    """Whether ``model`` belongs to a family that rejects a system role."""
    return model.lower().startswith(OPENAI_NO_SYSTEM_ROLE_PREFIXES)


def supports_web_search(model: str) -> bool:
    """Whether ``model`` accepts ``web_search_options`` on Chat Completions."""
    return "search" in model.lower()


def build_messages(request: NormalizeRequest) -> List[Dict[str, str]]:
    """Return provider-shaped messages for ``request``.

    For models that reject a system role the system prompt is prepended to
    the first user turn instead. If there is no user turn the prompt becomes
    a leading user turn of its own.
    """
    turns = [m.to_dict() for m in request.conversation_turns()]
    prompt = request.system_prompt
    if not prompt:
        return turns
    if not rejects_system_role(request.model):
        return [{"role": "system", "content": prompt}] + turns
    for turn in turns:
        if turn["role"] == "user":
            turn["content"] = f"{prompt}{OPENAI_SYSTEM_PROMPT_SEPARATOR}{turn['content']}"
            return turns
    return [{"role": "user", "content": prompt}] + turns


__all__ = ["rejects_system_role", "supports_web_search", "build_messages"]
