"""
Message DTO shared by both provider adapters.

Defines the `Message` dataclass and the `Role` literal. The normalizer only
ever forwards plain text turns, so ``content`` is a string.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


Role = Literal["system", "user", "assistant"]


@dataclass
class Message:
    """A canonical chat message.

    Attributes:
        role: Author of the turn (``"system"``, ``"user"`` or ``"assistant"``).
        content: Plain text of the turn.
    """

    role: Role
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


__all__ = ["Message", "Role"]
