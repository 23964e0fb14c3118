"""
Pydantic DTOs validating inbound normalize requests at the HTTP edge.

Purpose
-------
Validate the caller's payload before it becomes a `NormalizeRequest`:
roles, non-empty content, a known provider, a non-empty model and, when a
reference website is given, that it is an http(s) URL.

External dependencies: Pydantic only. Validation either succeeds or raises
`pydantic.ValidationError`; the HTTP layer maps that to a 400 response.
"""

from __future__ import annotations

from typing import List, Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator, model_validator

from ..models import Message, NormalizeRequest, ProviderKind


Role = Literal["system", "user", "assistant"]


class MessageDTO(BaseModel):
    """A chat turn with non-empty text content."""

    role: Role
    content: str

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("content string must be non-empty")
        return value


class NormalizeRequestDTO(BaseModel):
    """Validated request body for ``POST /api/chat/stream``.

    Raises:
        ValidationError: On invalid roles, empty content, an unknown
            provider, or a malformed website URL.
    """

    provider: ProviderKind
    model: str = Field(..., min_length=1)
    messages: List[MessageDTO] = Field(..., min_length=1)
    system_prompt: str = ""
    website_url: Optional[str] = None
    conversation_id: Optional[str] = None

    @field_validator("provider", mode="before")
    @classmethod
    def _lower_provider(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("website_url")
    @classmethod
    def _website_is_http(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        parsed = urlparse(value.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("website_url must be an absolute http(s) URL")
        return value.strip()

    @model_validator(mode="after")
    def _has_user_turn(self) -> "NormalizeRequestDTO":
        if not any(m.role == "user" for m in self.messages):
            raise ValueError("messages must include at least one user turn")
        return self

    def to_request(self) -> NormalizeRequest:
        """Map the validated DTO onto the canonical dataclass."""
        return NormalizeRequest(
            messages=[Message(role=m.role, content=m.content) for m in self.messages],
            model=self.model,
            system_prompt=self.system_prompt,
            provider=self.provider,
            website_url=self.website_url,
            conversation_id=self.conversation_id,
        )


__all__ = ["MessageDTO", "NormalizeRequestDTO"]
