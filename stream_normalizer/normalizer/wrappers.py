"""Wrapper kinds classifying a whole response."""

from __future__ import annotations

from enum import Enum


class WrapperKind(str, Enum):
    """The three mutually exclusive top-level wrappers."""

    EMAIL_COPY = "email_copy"
    CLARIFICATION_REQUEST = "clarification_request"
    NON_COPY_RESPONSE = "non_copy_response"

    @property
    def open_tag(self) -> str:
        return f"<{self.value}>"

    @property
    def close_tag(self) -> str:
        return f"</{self.value}>"


__all__ = ["WrapperKind"]
